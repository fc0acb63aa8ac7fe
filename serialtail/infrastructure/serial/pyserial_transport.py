"""pyserial implementation of the serial transport port."""

import errno
import logging

import serial

from serialtail.domain import (
    PermissionDeniedError,
    SerialConnectionError,
    SerialReadError,
    SerialSettings,
    SerialWriteError,
)

logger = logging.getLogger(__name__)

_PERMISSION_MARKERS = ("permission denied", "access is denied")


def _is_permission_error(exc: BaseException) -> bool:
    if isinstance(exc, PermissionError):
        return True
    if getattr(exc, "errno", None) in (errno.EACCES, errno.EPERM):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _PERMISSION_MARKERS)


class PySerialTransport:
    """Adapts a pyserial port to SerialTransportPort.

    Port names are passed to serial_for_url, so pyserial URLs such as
    loop:// or socket://host:port work as well as device paths.
    """

    def __init__(self, port: serial.SerialBase) -> None:
        self._serial = port

    @classmethod
    def open(cls, settings: SerialSettings) -> "PySerialTransport":
        """Open a port.

        Raises:
            PermissionDeniedError: The OS refused access.
            SerialConnectionError: Any other open failure.
        """
        try:
            port = serial.serial_for_url(
                settings.port,
                baudrate=settings.baudrate,
                bytesize=settings.bytesize,
                parity=settings.parity,
                stopbits=settings.stopbits,
                timeout=settings.read_timeout,
                write_timeout=settings.read_timeout * 10,
            )
        except (serial.SerialException, OSError, ValueError) as e:
            if _is_permission_error(e):
                raise PermissionDeniedError(
                    f"Permission to access {settings.port} was denied"
                ) from e
            raise SerialConnectionError(f"Could not open {settings.port}: {e}") from e

        logger.debug("Opened port settings=%s", settings)
        return cls(port)

    @property
    def is_open(self) -> bool:
        return bool(self._serial.is_open)

    def read(self, size: int = 4096) -> bytes | None:
        """Read what is waiting, blocking up to the port timeout for one byte."""
        if not self._serial.is_open:
            return None

        try:
            waiting = self._serial.in_waiting
            data = self._serial.read(min(waiting, size) if waiting else 1)
            if data:
                # Pick up anything that arrived with the first byte
                waiting = self._serial.in_waiting
                if waiting and len(data) < size:
                    data += self._serial.read(min(waiting, size - len(data)))
        except (serial.SerialException, OSError, TypeError, AttributeError) as e:
            # pyserial raises TypeError/AttributeError when the port is
            # closed underneath a blocking read
            if not self._serial.is_open:
                return None
            raise SerialReadError(str(e)) from e

        return data

    def write(self, data: bytes) -> None:
        try:
            self._serial.write(data)
            self._serial.flush()
        except (serial.SerialException, OSError) as e:
            raise SerialWriteError(f"Failed to send data: {e}") from e

    def cancel_read(self) -> None:
        """Abort a blocking read (where the platform backend supports it)."""
        cancel = getattr(self._serial, "cancel_read", None)
        if cancel is None:
            # Reads still return within the port timeout
            return
        try:
            cancel()
        except (serial.SerialException, OSError) as e:
            logger.debug("cancel_read failed: %s", e)

    def close(self) -> None:
        self._serial.close()
