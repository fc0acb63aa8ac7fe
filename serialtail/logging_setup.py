"""Logging configuration."""

import logging
import os

LOG_LEVEL_ENV = "SERIALTAIL_LOG_LEVEL"
LOG_FILE_ENV = "SERIALTAIL_LOG_FILE"
DEFAULT_LOG_FILE = "serialtail.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.WARNING, log_file: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level, as a number or a name such as "DEBUG".
        log_file: Write to this file instead of stderr.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(level)


def setup_logging_from_env(verbose: bool = False, to_file: bool = False) -> None:
    """Configure logging from SERIALTAIL_LOG_LEVEL / SERIALTAIL_LOG_FILE.

    Args:
        verbose: Force DEBUG regardless of the environment.
        to_file: Log to a file; the console UI owns the terminal.
    """
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    log_file = os.environ.get(LOG_FILE_ENV, DEFAULT_LOG_FILE) if to_file else None
    setup_logging(level, log_file)
