"""Tests for console status formatting."""

import pytest

from serialtail.application.services import MonitorService
from serialtail.cli.console import format_size, format_status
from serialtail.domain import SerialReadError


def status_text(fragments) -> str:
    return "".join(text for _, text in fragments)


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, "0 B"), (1023, "1023 B"), (2048, "2.0 KiB"), (3 * 1024 * 1024, "3.0 MiB")],
    )
    def test_units(self, size, expected):
        """Test byte counts pick a readable unit."""
        assert format_size(size) == expected


class TestFormatStatus:
    """Tests for format_status."""

    def test_disconnected(self, monitor):
        """Test the status of an idle monitor."""
        text = status_text(format_status(monitor))

        assert "/dev/ttyFAKE0@115200 8N1" in text
        assert "disconnected" in text
        assert "send +LF" in text

    def test_no_settings(self, transport_factory):
        """Test a monitor without settings."""
        monitor = MonitorService(transport_factory)

        assert "no port" in status_text(format_status(monitor))

    @pytest.mark.asyncio
    async def test_recording_shown(self, monitor, transport_factory, wait_until):
        """Test an active recording and its size appear."""
        await monitor.connect()
        try:
            monitor.start_recording()
            transport_factory.last.feed(b"x" * 10)
            await wait_until(lambda: monitor.recording_size == 10)

            fragments = format_status(monitor)
        finally:
            await monitor.disconnect()

        assert ("class:status.recording", " REC 10 B ") in fragments
        assert "connected" in status_text(fragments)

    def test_error_message_styled(self, monitor):
        """Test messages starting with '!' are shown as errors."""
        fragments = format_status(monitor, "!No recorded data to save.")

        assert ("class:status.error", "No recorded data to save.") in fragments

    @pytest.mark.asyncio
    async def test_read_error_shown(self, monitor, transport_factory, wait_until):
        """Test a read error that ended the stream is displayed."""
        await monitor.connect()
        try:
            transport_factory.last.fail_read(SerialReadError("device disconnected"))
            await wait_until(lambda: not monitor.is_reading)

            text = status_text(format_status(monitor))
        finally:
            await monitor.disconnect()

        assert "stream closed" in text
        assert "device disconnected" in text
