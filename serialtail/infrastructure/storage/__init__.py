"""Storage infrastructure - recording export."""

from .file_recording_store import FileRecordingStore, default_filename

__all__ = [
    "FileRecordingStore",
    "default_filename",
]
