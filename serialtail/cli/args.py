"""Command line argument parsing."""

import argparse

from serialtail import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace with:
        - port: Serial port or pyserial URL (optional)
        - baudrate: Baud rate override (optional)
        - config: Config file path (optional)
        - append_cr / append_lf: Line ending overrides (optional)
        - output_dir: Directory for saved recordings (optional)
        - list_ports: Whether to only list ports
        - verbose: Whether to log at DEBUG
    """
    parser = argparse.ArgumentParser(
        prog="serialtail",
        description="serialtail - live serial monitor with recording and command history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "keys: Enter send | Up/Down history | Ctrl-R record | Ctrl-S save\n"
            "      Ctrl-B next baud rate | Ctrl-O connect/disconnect\n"
            "      F2 toggle CR | F3 toggle LF | Ctrl-Q quit"
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "port",
        nargs="?",
        default=None,
        help="Serial port or pyserial URL (default: from config, or ask)",
    )
    parser.add_argument(
        "-b",
        "--baud",
        dest="baudrate",
        type=int,
        default=None,
        help="Baud rate (default: from config, 115200)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Config file (default: $SERIALTAIL_CONFIG_PATH or serialtail.yaml)",
    )
    parser.add_argument(
        "--cr",
        dest="append_cr",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append carriage return to sent commands",
    )
    parser.add_argument(
        "--lf",
        dest="append_lf",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append line feed to sent commands",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for saved recordings",
    )
    parser.add_argument(
        "-l",
        "--list-ports",
        action="store_true",
        help="List serial ports and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )

    args = parser.parse_args(argv)

    if args.baudrate is not None and args.baudrate <= 0:
        parser.error("baud rate must be positive")

    return args
