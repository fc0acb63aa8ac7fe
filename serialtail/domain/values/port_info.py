"""Discovered serial port description."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PortInfo:
    """A serial port as reported by the OS."""

    device: str
    description: str = ""
    hwid: str = ""

    def __str__(self) -> str:
        if self.description and self.description != "n/a":
            return f"{self.device} ({self.description})"
        return self.device
