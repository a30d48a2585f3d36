"""Defines the :class:`.Logger` class and the module-level logging one-liners."""

from __future__ import annotations

# Standard Library Imports
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Local Imports
from . import pathSafeTime
from .behavioral_config import BehavioralConfig

LOGGER_NAME: str = "missiontime"
"""``str``: name of the top-level logger that every module in the package records to."""

LOG_FORMAT: str = "%(asctime)s - %(module)s - %(levelname)s - %(message)s"
"""``str``: format applied to every handler attached by :class:`.Logger`."""


class Logger:
    """Extended logger wraps the standard Python logging package.

    The handler is chosen from the ``[logging]`` section of :class:`.BehavioralConfig`: either
    ``sys.stdout`` or a rotating, timestamped log file.
    """

    def __init__(self, name=LOGGER_NAME, level=None, path=None, allow_multiple_handlers=None):
        """Configure the logging information for this Logger instance.

        Args:
            name (``str``, optional): Name of the the logger instance. Defaults to the package logger.
            level (``int``, optional): Determines what level of log messages are published
            path (``str``, optional): ``"stdout"``, or the directory where the log file will be stored
            allow_multiple_handlers (``bool``, optional): whether multiple log handlers are permitted
        """
        config = BehavioralConfig.getConfig().logging
        if not level:
            level = config.Level
        if not path:
            path = config.OutputLocation
        if not allow_multiple_handlers:
            allow_multiple_handlers = config.AllowMultipleHandlers

        self.logger = logging.getLogger(name)
        self.filename = "stdout"
        if not self.logger.handlers or allow_multiple_handlers is True:
            handler = self._buildHandler(name, path)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.setLevel(level)
            self.logger.addHandler(handler)

    def _buildHandler(self, name: str, path: str) -> logging.Handler:
        """Create the stream or rotating file handler for this logger.

        Args:
            name (``str``): logger name, used as the log file prefix
            path (``str``): ``"stdout"``, or the directory in which to write the log file

        Returns:
            ``logging.Handler``: handler that is not yet attached to the logger
        """
        if path == "stdout":
            return logging.StreamHandler(sys.stdout)

        log_dir = Path(path)
        if not log_dir.exists():
            self.logger.info(f"Path did not exist: {path!r}. Creating path...")
            log_dir.mkdir(parents=True)

        self.filename = str(log_dir / f"{name}_{pathSafeTime()}.log")
        config = BehavioralConfig.getConfig().logging
        return RotatingFileHandler(
            self.filename,
            maxBytes=config.MaxFileSize,
            backupCount=config.MaxFileCount,
        )

    def __getattr__(self, name):
        """Forward everything else to the wrapped :class:`logging.Logger`."""
        return getattr(self.logger, name)


def _missiontimeLog(message: str, level: int):
    """Log a message to the top-level log record.

    This provides a simple, easy one-liner that doesn't require pre-initializing a logger object.

    Args:
        message (``str``): message to record with in the log.
        level (``int``): level at which to log this message, corresponding to `logging.LOG_LEVEL`.
    """
    logging.getLogger(LOGGER_NAME).log(msg=message, level=level)


def missiontimeLogError(message: str):
    """Log an ERROR message to the top-level log record.

    Args:
        message (``str``): message to record with in the log.
    """
    _missiontimeLog(message, level=logging.ERROR)


def missiontimeLogWarning(message: str):
    """Log a WARNING message to the top-level log record."""
    _missiontimeLog(message, level=logging.WARNING)


def missiontimeLogInfo(message: str):
    """Log an INFO message to the top-level log record."""
    _missiontimeLog(message, level=logging.INFO)


def missiontimeLogDebug(message: str):
    """Log a DEBUG message to the top-level log record."""
    _missiontimeLog(message, level=logging.DEBUG)
