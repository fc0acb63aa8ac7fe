"""Serial infrastructure - pyserial adapter and port discovery."""

from .port_discovery import list_serial_ports, require_serial_ports
from .pyserial_transport import PySerialTransport

__all__ = [
    "PySerialTransport",
    "list_serial_ports",
    "require_serial_ports",
]
