"""Command history entity - recall of previously sent commands."""

from collections import deque
from dataclasses import dataclass, field

from ..values import HistoryDirection

# Business rules
HISTORY_MAX_ENTRIES = 50


@dataclass
class CommandHistory:
    """Bounded history of sent commands with a navigation cursor.

    cursor is None while at the end (the live input line), otherwise an
    index into entries. A draft of the unsent input is kept while
    browsing and handed back when the cursor returns to the end.
    """

    max_entries: int = HISTORY_MAX_ENTRIES
    _entries: deque[str] = field(default_factory=deque)
    _cursor: int | None = None
    _draft: str | None = None

    def __post_init__(self) -> None:
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")

    @property
    def entries(self) -> list[str]:
        """History entries, oldest first."""
        return list(self._entries)

    @property
    def cursor(self) -> int | None:
        """Index being shown, or None at the end."""
        return self._cursor

    @property
    def at_end(self) -> bool:
        return self._cursor is None

    @property
    def draft(self) -> str | None:
        return self._draft

    def record(self, text: str) -> None:
        """Add a sent command. Consecutive repeats are stored once."""
        if not self._entries or self._entries[-1] != text:
            self._entries.append(text)
            while len(self._entries) > self.max_entries:
                self._entries.popleft()
        self._reset_cursor()

    def navigate(self, direction: HistoryDirection, current_input: str = "") -> str:
        """Move the cursor and return the text the input should show."""
        if not self._entries:
            return current_input

        last = len(self._entries) - 1

        if direction is HistoryDirection.OLDER:
            if self._cursor is None:
                self._stash_draft(current_input)
                self._cursor = last
            elif self._cursor > 0:
                self._cursor -= 1
            return self._entries[self._cursor]

        if self._cursor is None:
            return current_input

        if self._cursor < last:
            self._cursor += 1
            return self._entries[self._cursor]

        draft = self._draft or ""
        self._reset_cursor()
        return draft

    def clear(self) -> None:
        """Forget all entries."""
        self._entries.clear()
        self._reset_cursor()

    def _stash_draft(self, current_input: str) -> None:
        text = current_input.strip()
        if text and text != self._entries[-1]:
            self._draft = text

    def _reset_cursor(self) -> None:
        self._cursor = None
        self._draft = None

    def __len__(self) -> int:
        return len(self._entries)
