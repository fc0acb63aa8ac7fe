"""Chunk sink entity - ordered collector of raw serial chunks."""

import threading
from dataclasses import dataclass, field


@dataclass
class ChunkSink:
    """Append-only collector of immutable byte chunks.

    Used for both the live buffer (drained every refresh) and the
    recording buffer (materialized on export).
    Appends and drains are serialized by a lock, so a chunk is either
    in a drained batch or left for the next one, never both.
    """

    _chunks: list[bytes] = field(default_factory=list)
    _size: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def size(self) -> int:
        """Total bytes held."""
        with self._lock:
            return self._size

    @property
    def is_empty(self) -> bool:
        """Check if no chunk has been appended since the last clear."""
        with self._lock:
            return not self._chunks

    def append(self, chunk: bytes) -> None:
        """Append a chunk."""
        chunk = bytes(chunk)
        with self._lock:
            self._chunks.append(chunk)
            self._size += len(chunk)

    def drain_all(self) -> list[bytes]:
        """Take every chunk held and leave the sink empty."""
        with self._lock:
            drained = self._chunks
            self._chunks = []
            self._size = 0
        return drained

    def materialize(self) -> bytes:
        """Concatenate all chunks in arrival order without clearing."""
        with self._lock:
            return b"".join(self._chunks)

    def clear(self) -> None:
        """Drop all chunks."""
        with self._lock:
            self._chunks = []
            self._size = 0

    def __len__(self) -> int:
        """Return number of chunks held."""
        with self._lock:
            return len(self._chunks)
