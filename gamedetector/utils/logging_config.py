"""Logging configuration for the command-line entry point.

Called once at startup by main.py. Handlers are attached to the
``gamedetector`` package logger, so every module that does
``logger = logging.getLogger(__name__)`` reports through them while a
host application embedding the detector keeps its own root handlers.

Levels are resolved in precedence order:
    config "log_level"  >  GAMEDETECTOR_LOG_LEVEL env var  >  WARNING
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "gamedetector"

_TIME = "%H:%M:%S"
_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# Most verbose level first: (threshold, format, datefmt)
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, _TIME),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", _TIME),
)
_CONSOLE_DEFAULT = ("%(levelname)s: %(message)s", None)

_FILE_FORMAT = (_DETAILED, "%Y-%m-%d %H:%M:%S")


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(*_CONSOLE_DEFAULT)


def _file_handler(log_file: Union[str, Path], level: int) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(*_FILE_FORMAT))
    return handler


def setup_logging(level: str = "WARNING", log_file: Union[str, Path, None] = None) -> logging.Logger:
    """Route the detector's log records to stderr and optionally a file.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
        log_file: Optional path of a log file, always written in full
            detail at the same level

    Returns:
        The configured package logger
    """
    numeric_level = parse_level(level)

    # stdout carries the JSON result
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_console_formatter(numeric_level))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.addHandler(console)
    if log_file:
        package_logger.addHandler(_file_handler(log_file, numeric_level))

    package_logger.setLevel(numeric_level)
    package_logger.propagate = False
    return package_logger


def parse_level(level: Optional[str]) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
