"""
Rich-enhanced logging configuration.

Log records go to the stderr console so they never mix with rendered output
on stdout.

Usage:
    from eagle_eye.eagle.logging import configure_logging, get_logger

    configure_logging(level="debug")

    logger = get_logger("client")
    logger.debug("Fetching item list")
"""

import logging
from pathlib import Path
from typing import Literal

from rich.logging import RichHandler

from eagle_eye.utils.ui import console as rich_console

# Root logger name for the package
MODULE_LOGGER_NAME = "eagle_eye"

# Type alias for log levels
LogLevel = Literal["debug", "info", "warning", "error", "critical"]


def _get_log_level(level: LogLevel | int) -> int:
    """Convert level string to logging constant."""
    if isinstance(level, int):
        return level

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return level_map.get(level.lower(), logging.WARNING)


def configure_logging(
    level: LogLevel | int = "warning",
    console: bool = True,
    file_path: str | Path | None = None,
    file_log_level: LogLevel | int | None = None,
    format_string: str | None = None,
    show_path: bool = False,
    show_time: bool = True,
) -> logging.Logger:
    """
    Configure logging for the package.

    Args:
        level: Log level for console output
        console: Whether to enable console (stderr) logging
        file_path: Optional file path for file logging
        file_log_level: Log level for file output (defaults to level)
        format_string: Custom format string for file logging
        show_path: Show file path in console logs
        show_time: Show timestamp in console logs

    Returns:
        Configured package logger
    """
    log_level = _get_log_level(level)
    file_log_level = _get_log_level(file_log_level) if file_log_level else log_level

    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(min(log_level, file_log_level) if file_path else log_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = RichHandler(
            level=log_level,
            console=rich_console,
            show_time=show_time,
            show_path=show_path,
            markup=False,
            log_time_format="[%X]",
            keywords=["Eagle", "API", "item", "folder", "library", "filter"],
        )
        logger.addHandler(console_handler)

    # File handler - always use standard formatting for parseable logs
    if file_path:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Optional sub-logger name (e.g., "client", "output")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{MODULE_LOGGER_NAME}.{name}")
    return logging.getLogger(MODULE_LOGGER_NAME)

