"""Live view entity - bounded text tail of the decoded stream."""

import codecs
from dataclasses import dataclass, field

from .chunk_sink import ChunkSink

# Business rules
DISPLAY_MAX_LINES = 10
LINE_SEPARATOR = "\n"


def _utf8_decoder() -> codecs.IncrementalDecoder:
    return codecs.getincrementaldecoder("utf-8")(errors="replace")


@dataclass
class LiveView:
    """Tail-of-N-lines view over everything decoded so far.

    Decoding is incremental: a multi-byte sequence split across two
    drains is held back and completed on the next one. Malformed bytes
    become U+FFFD instead of raising.
    """

    max_lines: int = DISPLAY_MAX_LINES
    _text: str = ""
    _decoder: codecs.IncrementalDecoder = field(
        default_factory=_utf8_decoder, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.max_lines <= 0:
            raise ValueError("max_lines must be positive")

    @property
    def text(self) -> str:
        """Current display text."""
        return self._text

    @property
    def lines(self) -> list[str]:
        """Current display text split into segments."""
        return self._text.split(LINE_SEPARATOR)

    def refresh(self, sink: ChunkSink) -> bool:
        """Drain the sink into the view.

        Returns:
            True if the display text changed.
        """
        chunks = sink.drain_all()
        if not chunks:
            return False
        return self.feed(b"".join(chunks))

    def feed(self, data: bytes) -> bool:
        """Decode data and fold it into the view.

        Returns:
            True if the display text changed.
        """
        decoded = self._decoder.decode(data, final=False)
        if not decoded:
            # Only an incomplete sequence so far
            return False

        segments = (self._text + decoded).split(LINE_SEPARATOR)
        self._text = LINE_SEPARATOR.join(segments[-self.max_lines :])
        return True

    def reset_decoder(self) -> None:
        """Forget any dangling partial sequence (new stream)."""
        self._decoder.reset()

    def clear(self) -> None:
        """Clear the view and decoder state."""
        self._text = ""
        self.reset_decoder()
