"""Command line interface."""

import asyncio
import logging
from argparse import Namespace

from serialtail.composition import create_container
from serialtail.config import Config, load_config
from serialtail.container import Container
from serialtail.domain import SerialMonitorError
from serialtail.infrastructure.serial import list_serial_ports, require_serial_ports
from serialtail.logging_setup import setup_logging_from_env

from .args import parse_args
from .display import choose_port, display_error, display_ports, display_startup

logger = logging.getLogger(__name__)


def apply_overrides(config: Config, args: Namespace) -> Config:
    """Fold command line flags into the loaded configuration."""
    serial_update = {}
    if args.port:
        serial_update["port"] = args.port
    if args.baudrate is not None:
        serial_update["baudrate"] = args.baudrate

    send_update = {}
    if args.append_cr is not None:
        send_update["append_cr"] = args.append_cr
    if args.append_lf is not None:
        send_update["append_lf"] = args.append_lf

    recording_update = {}
    if args.output_dir:
        recording_update["output_dir"] = args.output_dir

    return config.model_copy(
        update={
            "serial": config.serial.model_copy(update=serial_update),
            "send": config.send.model_copy(update=send_update),
            "recording": config.recording.model_copy(update=recording_update),
        }
    )


async def run_console(container: Container) -> int:
    """Connect, run the console until quit, then disconnect."""
    from .console import SerialConsole

    monitor = container.monitor_service
    try:
        await monitor.connect()
    except SerialMonitorError as e:
        display_error(str(e))
        return 1

    console = SerialConsole(monitor, container.recording_store)
    try:
        await console.run()
    finally:
        await monitor.disconnect()

    if monitor.has_recording:
        logger.info("Exiting with unsaved recording bytes=%d", monitor.recording_size)
    return 0


def run(argv: list[str] | None = None) -> int:
    """Run the serialtail command."""
    args = parse_args(argv)

    if args.list_ports:
        display_ports(list_serial_ports())
        return 0

    setup_logging_from_env(verbose=args.verbose, to_file=True)
    try:
        # pydantic's ValidationError is a ValueError
        config = apply_overrides(load_config(args.config), args)
        port = config.serial.port or choose_port(require_serial_ports())
        settings = config.serial.to_settings(port)
    except (SerialMonitorError, ValueError) as e:
        display_error(str(e))
        return 1

    container = create_container(config=config, settings=settings)
    display_startup(settings, config.send.to_line_ending())

    try:
        return asyncio.run(run_console(container))
    except KeyboardInterrupt:
        return 130


__all__ = [
    "apply_overrides",
    "parse_args",
    "run",
    "run_console",
]
