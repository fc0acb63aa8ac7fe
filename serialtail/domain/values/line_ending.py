"""Line ending value object for outgoing commands."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineEnding:
    """Terminator appended to each sent command."""

    append_cr: bool = False
    append_lf: bool = True

    def apply(self, text: str) -> str:
        """Frame text for the wire: CR first, then LF."""
        if self.append_cr:
            text += "\r"
        if self.append_lf:
            text += "\n"
        return text

    @property
    def label(self) -> str:
        """Short label for status displays, e.g. 'CRLF' or 'none'."""
        label = ("CR" if self.append_cr else "") + ("LF" if self.append_lf else "")
        return label or "none"
