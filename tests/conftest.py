"""Shared test fixtures and configuration."""

import asyncio
import queue
import time

import pytest

from serialtail.application.services import MonitorService
from serialtail.domain import (
    ChunkSink,
    CommandHistory,
    LineEnding,
    LiveView,
    RecordingController,
    SerialConnectionError,
    SerialSettings,
    SerialWriteError,
)

# ============= Domain Fixtures =============


@pytest.fixture
def serial_settings():
    """Settings for a fake port."""
    return SerialSettings(port="/dev/ttyFAKE0", baudrate=115200)


@pytest.fixture
def chunk_sink():
    """Empty chunk sink."""
    return ChunkSink()


@pytest.fixture
def live_view():
    """Empty live view with the default line limit."""
    return LiveView()


@pytest.fixture
def recording():
    """Idle recording controller."""
    return RecordingController()


@pytest.fixture
def history():
    """Empty command history."""
    return CommandHistory()


# ============= Mock Fixtures =============


class FakeTransport:
    """Fake serial port for testing.

    read() blocks briefly on a queue, like a port with a short timeout.
    """

    def __init__(self, settings: SerialSettings | None = None):
        self.settings = settings
        self._incoming: queue.Queue = queue.Queue()
        self._open = True
        self.written: list[bytes] = []
        self.fail_writes = False
        self.cancel_count = 0
        self.closed = False

    @property
    def is_open(self) -> bool:
        return self._open

    def read(self, size: int = 4096) -> bytes | None:
        if not self._open:
            return None
        try:
            item = self._incoming.get(timeout=0.01)
        except queue.Empty:
            return b""
        if isinstance(item, Exception):
            raise item
        return item

    def write(self, data: bytes) -> None:
        if self.fail_writes:
            raise SerialWriteError("Failed to send data: device gone")
        self.written.append(data)

    def cancel_read(self) -> None:
        self.cancel_count += 1
        self._incoming.put(b"")

    def close(self) -> None:
        self._open = False
        self.closed = True

    # Test helpers
    def feed(self, data: bytes) -> None:
        """Queue data to be returned by read()."""
        self._incoming.put(data)

    def end_stream(self) -> None:
        """Make the next read report end of stream."""
        self._incoming.put(None)

    def fail_read(self, error: Exception) -> None:
        """Make the next read raise error."""
        self._incoming.put(error)


class FakeTransportFactory:
    """Opens FakeTransports and remembers them."""

    def __init__(self):
        self.opened: list[FakeTransport] = []
        self.fail_with: Exception | None = None
        self.open_delay = 0.0

    def __call__(self, settings: SerialSettings) -> FakeTransport:
        if self.open_delay:
            time.sleep(self.open_delay)
        if self.fail_with is not None:
            raise self.fail_with
        transport = FakeTransport(settings)
        self.opened.append(transport)
        return transport

    @property
    def last(self) -> FakeTransport:
        return self.opened[-1]


@pytest.fixture
def transport_factory():
    """Factory producing fake transports."""
    return FakeTransportFactory()


@pytest.fixture
def failing_transport_factory():
    """Factory whose open always fails."""
    factory = FakeTransportFactory()
    factory.fail_with = SerialConnectionError("Could not open /dev/ttyFAKE0: no such device")
    return factory


# ============= Service Fixtures =============


@pytest.fixture
def monitor(transport_factory, serial_settings):
    """Monitor service over fake transports with a fast refresh."""
    return MonitorService(
        transport_factory=transport_factory,
        settings=serial_settings,
        line_ending=LineEnding(append_cr=False, append_lf=True),
        refresh_interval=0.01,
    )


async def _wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll predicate on the event loop until it holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met within timeout")
        await asyncio.sleep(0.005)


@pytest.fixture
def wait_until():
    """Async helper: await wait_until(lambda: condition)."""
    return _wait_until
