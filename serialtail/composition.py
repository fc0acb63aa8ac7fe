"""Composition root - the ONLY place where dependencies are wired."""

from pathlib import Path

from serialtail.application.services import MonitorService
from serialtail.config import Config, load_config
from serialtail.container import Container
from serialtail.domain import SerialSettings, TransportFactory
from serialtail.infrastructure.serial import PySerialTransport
from serialtail.infrastructure.storage import FileRecordingStore


def create_container(
    config: Config | None = None,
    config_path: Path | str | None = None,
    settings: SerialSettings | None = None,
    transport_factory: TransportFactory | None = None,
) -> Container:
    """Create the dependency container with all wired dependencies.

    Args:
        config: Already loaded configuration (skips loading).
        config_path: Path to config file, used when config is None.
        settings: Serial settings to connect with; defaults to the
            configured port when one is set.
        transport_factory: Port opener; defaults to pyserial.

    Returns:
        Fully wired dependency container.
    """
    if config is None:
        config = load_config(config_path)

    if settings is None and config.serial.port:
        settings = config.serial.to_settings()

    transport_factory = transport_factory or PySerialTransport.open

    monitor_service = MonitorService(
        transport_factory=transport_factory,
        settings=settings,
        line_ending=config.send.to_line_ending(),
        refresh_interval=config.display.refresh_interval,
        max_lines=config.display.max_lines,
        max_history=config.history.max_entries,
    )

    return Container(
        monitor_service=monitor_service,
        recording_store=FileRecordingStore(config.recording.output_dir),
        transport_factory=transport_factory,
        config=config,
    )
