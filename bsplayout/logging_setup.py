"""Logging setup and utilities."""

import logging
import os

from .ansi import LEVEL_STYLES, colorize, should_colorize

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    debug: bool = bool(os.environ.get("DEBUG"))


def is_debug() -> bool:
    """Return True when debug logs are enabled."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    LogObjects.debug = value


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    class ScreenLogFormatter(logging.Formatter):
        """A custom formatter, adding colors based on log level."""

        LOG_FORMAT = r"%(name)15s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"

        def __init__(self) -> None:
            super().__init__()
            use_colors = should_colorize()
            self._formatters = {
                level: logging.Formatter(colorize(self.LOG_FORMAT, *LEVEL_STYLES.get(level, ())) if use_colors else self.LOG_FORMAT)
                for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)
            }

        def format(self, record: logging.LogRecord) -> str:
            return self._formatters[record.levelno].format(record)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "bsplayout", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(f"bsplayout.{name}" if name != "bsplayout" else name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
