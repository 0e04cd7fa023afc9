"""
Logging Setup
=============

Configures structlog for the CLI: JSON lines with timestamp and level,
written to stderr or appended to a log file, filtered by level.

At most one log file is open at a time. Reconfiguring closes the previous
file, and the current one is closed at interpreter exit.
"""

import atexit
import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_log_stream: TextIO | None = None


def close_log_file() -> None:
    """Close the log file opened by ``configure_logging``, if any."""
    global _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None


def configure_logging(level: str = "warning", log_file: str | None = None) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name (debug, info, warning, error)
        log_file: Append events to this file instead of stderr
    """
    global _log_stream
    previous = _log_stream

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        stream = path.open("at", encoding="utf-8")
    else:
        stream = sys.stderr

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.lower(), logging.WARNING)),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
    )

    _log_stream = stream if log_file else None
    if previous is not None:
        previous.close()


atexit.register(close_log_file)
