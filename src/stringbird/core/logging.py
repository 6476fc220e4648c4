"""Structured logging for stringbird.

Events are JSON lines on stderr or appended to a log file. stdout belongs to
the CLI's human-facing output and, under ``serve``, to the MCP stdio
transport, so no event is ever written there.
"""
import sys
from typing import Any, List, Optional, TextIO

import structlog

from stringbird.constants import LoggingDefaults

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

# Log file opened by the last configure_logging call
_log_stream: Optional[TextIO] = None


def _open_destination(log_file: Optional[str]) -> TextIO:
    global _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None
    if log_file is None:
        return sys.stderr
    _log_stream = open(log_file, "a", encoding="utf-8")
    return _log_stream


def configure_logging(
    log_level: str = LoggingDefaults.DEFAULT_LEVEL,
    log_file: Optional[str] = None,
    quiet: bool = False,
) -> None:
    """Configure structlog for one stringbird run.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        log_file: Append events to this file instead of stderr
        quiet: Only warnings and errors reach stderr; a log file still gets log_level
    """
    level = LEVELS.get(log_level.upper(), LEVELS[LoggingDefaults.DEFAULT_LEVEL])
    if quiet and log_file is None:
        level = max(level, LEVELS["WARNING"])

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_open_destination(log_file)),
        # Loggers must not outlive a reconfiguration that closed their file
        cache_logger_on_first_use=False,
    )


def bind_command(command: str) -> None:
    """Tag every following event with the CLI command being run."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command)


def get_logger(name: str) -> Any:
    """Get a logger for a stringbird component (e.g. 'store.codec')."""
    return structlog.get_logger(name)
