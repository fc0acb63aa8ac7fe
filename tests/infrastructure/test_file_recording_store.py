"""Tests for FileRecordingStore."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from serialtail.domain import NothingToExportError
from serialtail.infrastructure.storage import FileRecordingStore, default_filename


class TestDefaultFilename:
    """Tests for default_filename."""

    def test_format(self):
        """Test the timestamp has no ':' or '.' characters."""
        now = datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=UTC)

        assert default_filename(now) == "serial_recording_2024-05-01T12-30-00-123Z.txt"

    def test_converted_to_utc(self):
        """Test non-UTC times are converted."""
        now = datetime(2024, 5, 1, 14, 30, 0, tzinfo=timezone(timedelta(hours=2)))

        assert default_filename(now) == "serial_recording_2024-05-01T12-30-00-000Z.txt"


class TestFileRecordingStore:
    """Tests for saving recordings."""

    def test_save_writes_exact_bytes(self, tmp_path):
        """Test the file holds the recording byte for byte."""
        store = FileRecordingStore(tmp_path)
        data = bytes(range(256)) + b"\r\n"

        path = store.save(data, "capture.bin")

        assert path == tmp_path / "capture.bin"
        assert path.read_bytes() == data

    def test_save_default_name(self, tmp_path):
        """Test a timestamped name is used when none is given."""
        store = FileRecordingStore(tmp_path)

        path = store.save(b"abc")

        assert path.parent == tmp_path
        assert path.name.startswith("serial_recording_")
        assert path.suffix == ".txt"

    def test_creates_output_dir(self, tmp_path):
        """Test a missing output directory is created."""
        store = FileRecordingStore(tmp_path / "captures" / "today")

        path = store.save(b"abc", "x.txt")

        assert path.read_bytes() == b"abc"

    def test_refuses_empty(self, tmp_path):
        """Test empty data raises instead of writing an empty file."""
        store = FileRecordingStore(tmp_path)

        with pytest.raises(NothingToExportError):
            store.save(b"", "empty.txt")

        assert not (tmp_path / "empty.txt").exists()
