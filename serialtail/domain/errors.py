"""Domain errors - everything the engine reports to its host."""


class SerialMonitorError(Exception):
    """Base class for serial monitor errors."""


class TransportUnavailableError(SerialMonitorError):
    """No serial capability or no serial ports on this system."""


class PortSelectionCancelledError(SerialMonitorError):
    """The operator did not pick a port."""


class PermissionDeniedError(SerialMonitorError):
    """Access to the serial port was refused by the OS."""


class SerialConnectionError(SerialMonitorError):
    """Opening the port failed for a reason other than permissions."""


class SerialReadError(SerialMonitorError):
    """The read side of the stream broke. Acquisition stops."""


class SerialWriteError(SerialMonitorError):
    """Sending failed. The command is not added to history."""


class NotConnectedError(SerialWriteError):
    """Send requested while no port is open."""


class NothingToExportError(SerialMonitorError):
    """Export requested with an empty recording."""

    def __init__(self, message: str = "No recorded data to save.") -> None:
        super().__init__(message)
