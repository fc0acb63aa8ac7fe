"""serialtail - live serial monitor with recording and command history."""

__version__ = "0.1.0"


def main() -> int:
    """Console script entry point."""
    from serialtail.cli import run

    return run()
