"""Serial port discovery."""

import logging

from serial.tools import list_ports

from serialtail.domain import PortInfo, TransportUnavailableError

logger = logging.getLogger(__name__)


def list_serial_ports() -> list[PortInfo]:
    """List serial ports known to the OS, sorted by device name."""
    ports = [
        PortInfo(device=port.device, description=port.description or "", hwid=port.hwid or "")
        for port in list_ports.comports()
    ]
    logger.debug("Discovered %d serial port(s)", len(ports))
    return sorted(ports, key=lambda p: p.device)


def require_serial_ports() -> list[PortInfo]:
    """Like list_serial_ports, but fails when there is nothing to connect to.

    Raises:
        TransportUnavailableError: No serial ports were found.
    """
    ports = list_serial_ports()
    if not ports:
        raise TransportUnavailableError("No serial ports found on this system")
    return ports
