"""File system store for exported recordings."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from serialtail.domain import NothingToExportError

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "serial_recording_"
FILENAME_SUFFIX = ".txt"


def default_filename(now: datetime | None = None) -> str:
    """Timestamped filename, e.g. serial_recording_2024-05-01T12-30-00-123Z.txt."""
    now = now or datetime.now(UTC)
    stamp = now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    stamp = stamp.replace(":", "-").replace(".", "-")
    return f"{FILENAME_PREFIX}{stamp}{FILENAME_SUFFIX}"


class FileRecordingStore:
    """Write recordings verbatim into a directory."""

    def __init__(self, output_dir: Path | str = ".") -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save(self, data: bytes, filename: str | None = None) -> Path:
        """Write data to a file.

        Args:
            data: Recorded bytes, written unchanged.
            filename: Name inside the output directory (default: timestamped).

        Returns:
            Path of the written file.

        Raises:
            NothingToExportError: data is empty.
        """
        if not data:
            raise NothingToExportError()

        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / (filename or default_filename())
        path.write_bytes(data)

        logger.info("Saved recording path=%s bytes=%d", path, len(data))
        return path
