"""Logging configuration using loguru."""

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

logger.configure(extra={"name": "typeahead"})


def setup_logger(
    level: str = "INFO",
    log_file: Path | None = None,
    console_output: bool = True,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru sinks.

    Args:
        level: Minimum level for all sinks.
        log_file: Optional file sink, rotated by size.
        console_output: Whether to log to stderr. Disable when a TUI owns the terminal.
        rotation: Rotation policy of the file sink.
        retention: Retention policy of the file sink.
    """
    logger.remove()
    if console_output:
        logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=LOG_FORMAT, rotation=rotation, retention=retention)


def get_logger(name: str):
    """Get a logger bound to a module name."""
    return logger.bind(name=name)
