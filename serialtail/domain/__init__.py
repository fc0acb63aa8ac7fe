"""Pure domain layer - no infrastructure dependencies."""

# Entities
from .entities import (
    DISPLAY_MAX_LINES,
    HISTORY_MAX_ENTRIES,
    LINE_SEPARATOR,
    ChunkSink,
    CommandHistory,
    LiveView,
    RecordingController,
)

# Errors
from .errors import (
    NothingToExportError,
    NotConnectedError,
    PermissionDeniedError,
    PortSelectionCancelledError,
    SerialConnectionError,
    SerialMonitorError,
    SerialReadError,
    SerialWriteError,
    TransportUnavailableError,
)

# Ports
from .ports import SerialTransportPort, TransportFactory

# Value Objects
from .values import (
    COMMON_BAUDRATES,
    DEFAULT_BAUDRATE,
    DEFAULT_READ_TIMEOUT,
    VALID_STOPBITS,
    HistoryDirection,
    LineEnding,
    PortInfo,
    RecordingState,
    SerialSettings,
)

__all__ = [
    # Values
    "SerialSettings",
    "DEFAULT_BAUDRATE",
    "DEFAULT_READ_TIMEOUT",
    "COMMON_BAUDRATES",
    "VALID_STOPBITS",
    "LineEnding",
    "HistoryDirection",
    "RecordingState",
    "PortInfo",
    # Entities
    "ChunkSink",
    "LiveView",
    "DISPLAY_MAX_LINES",
    "LINE_SEPARATOR",
    "RecordingController",
    "CommandHistory",
    "HISTORY_MAX_ENTRIES",
    # Errors
    "SerialMonitorError",
    "TransportUnavailableError",
    "PortSelectionCancelledError",
    "PermissionDeniedError",
    "SerialConnectionError",
    "SerialReadError",
    "SerialWriteError",
    "NotConnectedError",
    "NothingToExportError",
    # Ports
    "SerialTransportPort",
    "TransportFactory",
]
