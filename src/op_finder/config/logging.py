# op_finder/config/logging.py
"""
Centralized logging configuration for op-finder.

Console logging on stderr with selectable format, plus optional file
logging with rotation.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from op_finder.config.enums import LogFormat


_FORMATS: dict[LogFormat, str] = {
    LogFormat.JSON: (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
        '"message": "%(message)s", "logger": "%(name)s"}'
    ),
    LogFormat.DETAILED: "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d - %(message)s",
    LogFormat.SIMPLE: "%(levelname)-8s %(message)s",
}

# Libraries that are chatty below WARNING
_THIRD_PARTY_LOGGERS = ["asyncio", "markdown_it", "chuk_term"]


def setup_logging(
    level: str = "WARNING",
    quiet: bool = False,
    verbose: bool = False,
    format_style: str = "simple",
    log_file: str | None = None,
) -> None:
    """
    Configure centralized logging for op-finder.

    Args:
        level: Base logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        quiet: If True, suppress most output except errors
        verbose: If True, enable debug logging
        format_style: "simple", "detailed", or "json"
        log_file: Optional file path for rotating file log (DEBUG level).
                  Expands ~ and creates parent directories automatically.
    """
    # Determine effective log level
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")
        log_level = numeric_level

    try:
        style = LogFormat(format_style)
    except ValueError:
        raise ValueError(f"Invalid log format: {format_style}") from None

    # Clear any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(_FORMATS[style]))
    console_handler.setLevel(log_level)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        _add_file_handler(root_logger, log_file)

    # Silence noisy third-party loggers unless in debug mode
    if log_level > logging.DEBUG:
        for logger_name in _THIRD_PARTY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.ERROR)

    logging.getLogger("op_finder").setLevel(log_level)


def _add_file_handler(root_logger: logging.Logger, log_file: str) -> None:
    """Add a rotating file handler with JSON format."""
    from op_finder.config.defaults import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    file_formatter = logging.Formatter(
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "line": %(lineno)d, "message": "%(message)s"}'
    )

    file_handler = RotatingFileHandler(
        str(path),
        maxBytes=DEFAULT_LOG_MAX_BYTES,
        backupCount=DEFAULT_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    # File handler always logs at DEBUG so root must accept DEBUG too
    if root_logger.level > logging.DEBUG:
        root_logger.setLevel(logging.DEBUG)

    root_logger.addHandler(file_handler)
