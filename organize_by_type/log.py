"""
Logging setup.

Log file lines look like the shell tool's:

    [2025-01-23 14:05:09] [INFO] Moved: /data/a.txt -> /data/FILE_TYPE_TXT/a.txt

The console gets a RichHandler. Per-file move and error messages are tagged
with FILE_EVENT and kept off the console handler, because the CLI already
renders those events itself.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import RunConfig

PACKAGE_LOGGER = "organize_by_type"

FILE_EVENT = {"file_event": True}

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _NotFileEvent(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "file_event", False)


def setup_logging(config: RunConfig, console: Console | None = None) -> Path | None:
    """
    Configure the package logger for one run.

    Args:
        config: Supplies log level, verbosity and the log file location.
        console: Rich console for the console handler.

    Returns:
        Path of the log file, or None if file logging is disabled.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(config.log_level)
    logger.propagate = False

    if config.verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.addFilter(_NotFileEvent())
        logger.addHandler(console_handler)

    log_path = None
    if config.enable_logging:
        log_path = config.log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return log_path


def shutdown_logging() -> None:
    """Close handlers so the log file is flushed and released."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
