"""Recording controller entity."""

import logging
from dataclasses import dataclass, field

from ..errors import NothingToExportError
from ..values import RecordingState
from .chunk_sink import ChunkSink

logger = logging.getLogger(__name__)


@dataclass
class RecordingController:
    """Two-state gate mirroring incoming chunks into a recording sink.

    The recording sink has no size limit: it keeps every byte until the
    operator stops recording. A stopped recording stays exportable until
    the next start().
    """

    sink: ChunkSink = field(default_factory=ChunkSink)
    state: RecordingState = RecordingState.IDLE

    @property
    def is_recording(self) -> bool:
        """Check if chunks are currently being captured."""
        return self.state is RecordingState.RECORDING

    @property
    def size(self) -> int:
        """Bytes captured by the current or last recording."""
        return self.sink.size

    @property
    def has_data(self) -> bool:
        """Check if there is anything to export."""
        return self.sink.size > 0

    def start(self) -> None:
        """Begin a new recording, discarding the previous one."""
        self.sink.clear()
        self.state = RecordingState.RECORDING
        logger.info("Recording started")

    def stop(self) -> None:
        """Stop capturing. Captured data is kept."""
        if not self.is_recording:
            return
        self.state = RecordingState.IDLE
        logger.info("Recording stopped bytes=%d chunks=%d", self.sink.size, len(self.sink))

    def ingest(self, chunk: bytes) -> None:
        """Capture chunk if recording."""
        if self.is_recording:
            self.sink.append(chunk)

    def export(self) -> bytes:
        """Get the captured bytes as one buffer.

        Raises:
            NothingToExportError: Nothing was recorded.
        """
        if not self.has_data:
            raise NothingToExportError()
        return self.sink.materialize()
