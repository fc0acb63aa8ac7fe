"""Full-screen console host for the monitor service."""

import asyncio
import logging

from prompt_toolkit.application import Application
from prompt_toolkit.data_structures import Point
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea

from serialtail.application.services import MonitorEvent, MonitorService
from serialtail.domain import (
    HistoryDirection,
    LineEnding,
    NothingToExportError,
    SerialMonitorError,
)
from serialtail.infrastructure.storage import FileRecordingStore

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Enter: send | Up/Down: history | ^R: record | ^S: save | "
    "^B: baud | ^O: connect | F2: CR | F3: LF | ^Q: quit"
)

STYLE = Style.from_dict(
    {
        "frame.border": "ansiblue",
        "title": "ansicyan bold",
        "status": "reverse",
        "status.recording": "bg:ansired ansiwhite bold",
        "status.error": "ansired bold",
    }
)


def format_size(size: int) -> str:
    """Human readable byte count."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


def format_status(monitor: MonitorService, message: str = "") -> list[tuple[str, str]]:
    """Status bar fragments for the current monitor state."""
    settings = monitor.settings
    fragments = [("class:status", f" {settings or 'no port'} ")]

    if not monitor.is_connected:
        state = "disconnected"
    elif monitor.is_reading:
        state = "connected"
    else:
        state = "stream closed"
    fragments.append(("class:status", f"| {state} "))

    if monitor.is_recording:
        fragments.append(("class:status.recording", f" REC {format_size(monitor.recording_size)} "))
    elif monitor.has_recording:
        fragments.append(("class:status", f"| recorded {format_size(monitor.recording_size)} "))

    fragments.append(("class:status", f"| send +{monitor.line_ending.label} "))

    if message:
        fragments.append(("", " "))
        style = "class:status.error" if message.startswith("!") else ""
        fragments.append((style, message.lstrip("!")))
    elif monitor.last_error is not None:
        fragments.append(("", " "))
        fragments.append(("class:status.error", str(monitor.last_error)))

    return fragments


class SerialConsole:
    """Live tail, status bar and input line around a MonitorService."""

    def __init__(self, monitor: MonitorService, recording_store: FileRecordingStore) -> None:
        self._monitor = monitor
        self._store = recording_store
        self._message = ""
        self._tasks: set[asyncio.Task] = set()

        self._output = FormattedTextControl(
            text=self._output_text,
            get_cursor_position=self._output_cursor,
        )
        self._status = FormattedTextControl(text=self._status_text)
        self._input = TextArea(
            height=1,
            prompt="> ",
            multiline=False,
            wrap_lines=False,
            accept_handler=self._accept,
        )

        root = HSplit(
            [
                Window(FormattedTextControl([("class:title", HELP_TEXT)]), height=1),
                Frame(
                    Window(self._output, wrap_lines=True, height=Dimension(weight=1)),
                    title="Serial output",
                ),
                Window(self._status, height=1),
                self._input,
            ]
        )

        self._app: Application = Application(
            layout=Layout(root, focused_element=self._input),
            key_bindings=self._build_key_bindings(),
            full_screen=True,
            style=STYLE,
        )
        self._unsubscribe = monitor.subscribe(self._on_event)

    async def run(self) -> None:
        """Run until the operator quits."""
        try:
            await self._app.run_async()
        finally:
            self._unsubscribe()
            for task in list(self._tasks):
                task.cancel()

    # ============= Rendering =============

    def _output_text(self) -> str:
        return self._monitor.display_text

    def _output_cursor(self) -> Point:
        # Keep the view scrolled to the newest line
        return Point(x=0, y=self._monitor.display_text.count("\n"))

    def _status_text(self) -> list[tuple[str, str]]:
        return format_status(self._monitor, self._message)

    def _on_event(self, event: MonitorEvent) -> None:
        if event is MonitorEvent.CONNECTION and self._monitor.last_error is not None:
            # Read errors replace any older message
            self._message = ""
        self._app.invalidate()

    def _set_message(self, message: str) -> None:
        self._message = message
        self._app.invalidate()

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # ============= Actions =============

    def _accept(self, buffer) -> bool:
        self._spawn(self._send(buffer.text))
        # Keep the text; cleared only once the send succeeds
        return True

    async def _send(self, text: str) -> None:
        try:
            sent = await self._monitor.send_command(text)
        except SerialMonitorError as e:
            self._set_message(f"!{e}")
            return
        if sent:
            # Keep anything typed while the write was in flight
            if self._input.text == text:
                self._input.text = ""
            self._set_message("")

    def _navigate(self, direction: HistoryDirection) -> None:
        text = self._monitor.history_navigate(direction, self._input.text)
        self._input.buffer.set_document(
            Document(text, cursor_position=len(text)),
            bypass_readonly=True,
        )

    def _toggle_recording(self) -> None:
        if self._monitor.is_recording:
            self._monitor.stop_recording()
            self._set_message(f"Recording stopped ({format_size(self._monitor.recording_size)})")
        elif self._monitor.start_recording():
            self._set_message("Recording started")
        else:
            self._set_message("!Connect before recording")

    def _save_recording(self) -> None:
        try:
            data = self._monitor.export_recording()
            path = self._store.save(data)
        except NothingToExportError as e:
            self._set_message(f"!{e}")
            return
        except OSError as e:
            logger.error("Failed to save recording: %s", e)
            self._set_message(f"!Failed to save recording: {e}")
            return
        self._set_message(f"Saved {format_size(len(data))} to {path}")

    async def _next_baudrate(self) -> None:
        settings = self._monitor.settings
        if settings is None:
            return
        baudrate = settings.next_common_baudrate()
        try:
            await self._monitor.change_baudrate(baudrate)
        except SerialMonitorError as e:
            self._set_message(f"!{e}")
            return
        self._set_message(f"Baud rate {baudrate}")

    async def _toggle_connection(self) -> None:
        try:
            if self._monitor.is_connected:
                await self._monitor.disconnect()
                self._set_message("Disconnected")
            else:
                await self._monitor.connect()
                self._set_message("Connected")
        except SerialMonitorError as e:
            self._set_message(f"!{e}")

    def _toggle_line_ending(self, cr: bool = False, lf: bool = False) -> None:
        ending = self._monitor.line_ending
        self._monitor.line_ending = LineEnding(
            append_cr=ending.append_cr ^ cr,
            append_lf=ending.append_lf ^ lf,
        )
        self._app.invalidate()

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up", eager=True)
        def _(event):
            self._navigate(HistoryDirection.OLDER)

        @kb.add("down", eager=True)
        def _(event):
            self._navigate(HistoryDirection.NEWER)

        @kb.add("c-r")
        def _(event):
            self._toggle_recording()

        @kb.add("c-s")
        def _(event):
            self._save_recording()

        @kb.add("c-b")
        def _(event):
            self._spawn(self._next_baudrate())

        @kb.add("c-o")
        def _(event):
            self._spawn(self._toggle_connection())

        @kb.add("f2")
        def _(event):
            self._toggle_line_ending(cr=True)

        @kb.add("f3")
        def _(event):
            self._toggle_line_ending(lf=True)

        @kb.add("c-q")
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        return kb
