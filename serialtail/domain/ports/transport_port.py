"""Serial transport port - interface for the byte stream collaborator."""

from collections.abc import Callable
from typing import Protocol

from ..values import SerialSettings


class SerialTransportPort(Protocol):
    """Protocol for an open duplex serial byte stream.

    Infrastructure implements this (pyserial); tests use a fake.
    Calls are blocking and are run off the event loop by the engine.
    """

    @property
    def is_open(self) -> bool:
        """Check if the port is still open."""
        ...

    def read(self, size: int = 4096) -> bytes | None:
        """Read available bytes.

        Returns:
            Up to size bytes, b"" if nothing arrived within the read
            timeout, None at end of stream.

        Raises:
            SerialReadError: The stream is broken.
        """
        ...

    def write(self, data: bytes) -> None:
        """Write all of data.

        Raises:
            SerialWriteError: The write failed.
        """
        ...

    def cancel_read(self) -> None:
        """Make a pending read() return early."""
        ...

    def close(self) -> None:
        """Close the port."""
        ...


# Opens a port; raises SerialConnectionError or PermissionDeniedError.
TransportFactory = Callable[[SerialSettings], SerialTransportPort]
