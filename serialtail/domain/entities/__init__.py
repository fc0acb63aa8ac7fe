"""Domain entities - objects with identity and state."""

from .chunk_sink import ChunkSink
from .command_history import HISTORY_MAX_ENTRIES, CommandHistory
from .live_view import DISPLAY_MAX_LINES, LINE_SEPARATOR, LiveView
from .recording import RecordingController

__all__ = [
    "ChunkSink",
    "LiveView",
    "DISPLAY_MAX_LINES",
    "LINE_SEPARATOR",
    "RecordingController",
    "CommandHistory",
    "HISTORY_MAX_ENTRIES",
]
