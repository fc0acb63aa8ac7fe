"""Recording state value."""

from enum import Enum


class RecordingState(Enum):
    """Recording has no pause; only these two states exist."""

    IDLE = "idle"
    RECORDING = "recording"
