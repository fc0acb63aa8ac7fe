"""Monitor service - serial acquisition, live view, recording and sending."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from serialtail.domain import (
    DISPLAY_MAX_LINES,
    HISTORY_MAX_ENTRIES,
    ChunkSink,
    CommandHistory,
    HistoryDirection,
    LineEnding,
    LiveView,
    NotConnectedError,
    RecordingController,
    SerialMonitorError,
    SerialReadError,
    SerialSettings,
    SerialTransportPort,
    SerialWriteError,
    TransportFactory,
)

logger = logging.getLogger(__name__)

# Constants
REFRESH_INTERVAL = 0.15  # seconds
READ_CHUNK_SIZE = 4096


class MonitorEvent(Enum):
    """What changed, passed to subscribers."""

    DISPLAY = "display"
    CONNECTION = "connection"
    RECORDING = "recording"
    HISTORY = "history"


Subscriber = Callable[[MonitorEvent], None]


class MonitorService:
    """Engine for one serial monitor.

    Owns the live and recording buffers, the live view and the command
    history. Hosts observe it through subscribe() and the properties
    below; it never touches presentation.
    """

    def __init__(
        self,
        transport_factory: TransportFactory,
        settings: SerialSettings | None = None,
        line_ending: LineEnding | None = None,
        refresh_interval: float = REFRESH_INTERVAL,
        max_lines: int = DISPLAY_MAX_LINES,
        max_history: int = HISTORY_MAX_ENTRIES,
    ) -> None:
        if refresh_interval <= 0:
            raise ValueError("Refresh interval must be positive")

        self._transport_factory = transport_factory
        self._settings = settings
        self._line_ending = line_ending or LineEnding()
        self._refresh_interval = refresh_interval

        self._live_sink = ChunkSink()
        self._live_view = LiveView(max_lines=max_lines)
        self._recording = RecordingController()
        self._history = CommandHistory(max_entries=max_history)

        self._transport: SerialTransportPort | None = None
        self._read_task: asyncio.Task | None = None
        self._refresh_task: asyncio.Task | None = None
        self._reading = False
        self._last_error: SerialMonitorError | None = None
        self._subscribers: list[Subscriber] = []
        # Held across every connection change
        self._connection_lock = asyncio.Lock()

    # ============= Observation =============

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback.

        Returns:
            Function that removes the callback again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, event: MonitorEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Subscriber failed event=%s", event.value)

    @property
    def settings(self) -> SerialSettings | None:
        return self._settings

    @property
    def line_ending(self) -> LineEnding:
        return self._line_ending

    @line_ending.setter
    def line_ending(self, value: LineEnding) -> None:
        self._line_ending = value

    @property
    def is_connected(self) -> bool:
        """Check if a port is open."""
        return self._transport is not None

    @property
    def is_reading(self) -> bool:
        """Check if the read loop is still running."""
        return self._read_task is not None and not self._read_task.done()

    @property
    def is_recording(self) -> bool:
        return self._recording.is_recording

    @property
    def recording_size(self) -> int:
        """Bytes held by the current or last recording."""
        return self._recording.size

    @property
    def has_recording(self) -> bool:
        return self._recording.has_data

    @property
    def history(self) -> CommandHistory:
        return self._history

    @property
    def last_error(self) -> SerialMonitorError | None:
        """Most recent error that ended the read loop or a send."""
        return self._last_error

    @property
    def display_text(self) -> str:
        return self._live_view.text

    def get_display_text(self) -> str:
        """Get the current bounded tail of the stream."""
        return self._live_view.text

    # ============= Connection =============

    async def connect(self, settings: SerialSettings | None = None) -> None:
        """Open the port and start reading.

        Raises:
            SerialConnectionError: Port could not be opened.
            PermissionDeniedError: Access to the port was refused.
        """
        async with self._connection_lock:
            await self._connect(settings)

    async def disconnect(self) -> None:
        """Stop reading and close the port.

        Recording stops, but the recorded data and the history are kept.
        """
        async with self._connection_lock:
            await self._disconnect()

    async def reconnect(self, settings: SerialSettings | None = None) -> None:
        """Close and reopen, e.g. after a baud rate change.

        Recording data and history survive the reconnect.
        """
        async with self._connection_lock:
            await self._disconnect()
            await self._connect(settings)

    async def change_baudrate(self, baudrate: int) -> None:
        """Apply a new baud rate, reconnecting if currently connected."""
        async with self._connection_lock:
            if self._settings is None:
                raise ValueError("No serial settings to change")

            settings = self._settings.with_baudrate(baudrate)
            if self.is_connected:
                await self._disconnect()
                await self._connect(settings)
            else:
                self._settings = settings
                self._notify(MonitorEvent.CONNECTION)

    async def wait_closed(self) -> None:
        """Wait until the read loop ends on its own (EOF, error or disconnect)."""
        if self._read_task is not None:
            await asyncio.shield(self._read_task)

    async def _connect(self, settings: SerialSettings | None) -> None:
        # Caller holds the connection lock
        if self.is_connected:
            await self._disconnect()

        settings = settings or self._settings
        if settings is None:
            raise ValueError("No serial settings to connect with")

        transport = await asyncio.to_thread(self._transport_factory, settings)

        self._settings = settings
        self._transport = transport
        self._last_error = None
        # Bytes from a previous session must not prefix this one
        self._live_view.reset_decoder()

        self._reading = True
        self._read_task = asyncio.create_task(self._read_loop(transport))
        self._refresh_task = asyncio.create_task(self._refresh_loop())

        logger.info("Connected settings=%s", settings)
        self._notify(MonitorEvent.CONNECTION)

    async def _disconnect(self) -> None:
        # Caller holds the connection lock
        transport = self._transport
        if transport is None:
            return

        self._reading = False
        transport.cancel_read()
        try:
            if self._read_task is not None:
                try:
                    await self._read_task
                except Exception as e:
                    logger.error("Read loop failed settings=%s: %s", self._settings, e)
                self._read_task = None

            if self._refresh_task is not None:
                self._refresh_task.cancel()
                try:
                    await self._refresh_task
                except asyncio.CancelledError:
                    pass
                self._refresh_task = None

            # Show whatever arrived before the cancel
            self.refresh()
        finally:
            self._transport = None
            try:
                await asyncio.to_thread(transport.close)
            except Exception as e:
                logger.warning("Error closing port settings=%s: %s", self._settings, e)

        if self._recording.is_recording:
            self._recording.stop()
            self._notify(MonitorEvent.RECORDING)

        logger.info("Disconnected settings=%s", self._settings)
        self._notify(MonitorEvent.CONNECTION)

    async def _read_loop(self, transport: SerialTransportPort) -> None:
        """Read from the port and ingest every chunk."""
        while self._reading:
            try:
                data = await asyncio.to_thread(transport.read, READ_CHUNK_SIZE)
            except SerialReadError as e:
                logger.error("Serial read error settings=%s: %s", self._settings, e)
                self._last_error = e
                break
            except Exception as e:
                logger.exception("Unexpected read failure settings=%s", self._settings)
                error = SerialReadError(f"Failed to read data: {e}")
                error.__cause__ = e
                self._last_error = error
                break

            if data is None:
                logger.info("Serial stream ended settings=%s", self._settings)
                break

            if data:
                self.ingest(data)

        self._reading = False
        self._notify(MonitorEvent.CONNECTION)

    async def _refresh_loop(self) -> None:
        """Fold buffered chunks into the live view on a fixed cadence."""
        while True:
            await asyncio.sleep(self._refresh_interval)
            self.refresh()

    # ============= Data path =============

    def ingest(self, chunk: bytes) -> None:
        """Accept one chunk from the transport."""
        self._live_sink.append(chunk)
        self._recording.ingest(chunk)

    def refresh(self) -> bool:
        """Drain the live buffer into the view.

        Returns:
            True if the display text changed.
        """
        changed = self._live_view.refresh(self._live_sink)
        if changed:
            self._notify(MonitorEvent.DISPLAY)
        return changed

    # ============= Recording =============

    def start_recording(self) -> bool:
        """Start a new recording.

        Returns:
            False if not connected (nothing happens).
        """
        if not self.is_connected:
            logger.warning("Cannot start recording while disconnected")
            return False

        self._recording.start()
        self._notify(MonitorEvent.RECORDING)
        return True

    def stop_recording(self) -> None:
        """Stop recording; data stays exportable."""
        if not self._recording.is_recording:
            return
        self._recording.stop()
        self._notify(MonitorEvent.RECORDING)

    def toggle_recording(self) -> bool:
        """Start or stop recording.

        Returns:
            Whether recording is active afterwards.
        """
        if self._recording.is_recording:
            self.stop_recording()
        else:
            self.start_recording()
        return self._recording.is_recording

    def export_recording(self) -> bytes:
        """Get the recorded bytes.

        Raises:
            NothingToExportError: Nothing was recorded.
        """
        return self._recording.export()

    # ============= Sending =============

    async def send_command(
        self,
        text: str,
        append_cr: bool | None = None,
        append_lf: bool | None = None,
    ) -> bool:
        """Send a text command, framed with the configured line ending.

        Returns:
            False if text is blank (nothing sent).

        Raises:
            NotConnectedError: No port is open.
            SerialWriteError: The write failed; history is unchanged.
        """
        text = text.strip()
        if not text:
            return False

        transport = self._transport
        if transport is None:
            raise NotConnectedError("Not connected to a serial port")

        ending = LineEnding(
            append_cr=self._line_ending.append_cr if append_cr is None else append_cr,
            append_lf=self._line_ending.append_lf if append_lf is None else append_lf,
        )
        data = ending.apply(text).encode("utf-8")

        try:
            await asyncio.to_thread(transport.write, data)
        except SerialWriteError as e:
            logger.error("Serial write error settings=%s: %s", self._settings, e)
            self._last_error = e
            raise

        self._history.record(text)
        logger.debug("Sent text=%r ending=%s", text, ending.label)
        self._notify(MonitorEvent.HISTORY)
        return True

    def history_navigate(self, direction: HistoryDirection, current_input: str = "") -> str:
        """Step through sent commands.

        Returns:
            Text the input line should show.
        """
        return self._history.navigate(direction, current_input)
