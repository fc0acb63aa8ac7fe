"""Domain value objects - immutable data structures."""

from .history_direction import HistoryDirection
from .line_ending import LineEnding
from .port_info import PortInfo
from .recording_state import RecordingState
from .serial_settings import (
    COMMON_BAUDRATES,
    DEFAULT_BAUDRATE,
    DEFAULT_READ_TIMEOUT,
    VALID_STOPBITS,
    SerialSettings,
)

__all__ = [
    "SerialSettings",
    "DEFAULT_BAUDRATE",
    "DEFAULT_READ_TIMEOUT",
    "COMMON_BAUDRATES",
    "VALID_STOPBITS",
    "LineEnding",
    "HistoryDirection",
    "RecordingState",
    "PortInfo",
]
