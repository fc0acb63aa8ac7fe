"""Direction for command history navigation."""

from enum import Enum


class HistoryDirection(Enum):
    """OLDER walks back in time (arrow up), NEWER forward (arrow down)."""

    OLDER = "older"
    NEWER = "newer"
