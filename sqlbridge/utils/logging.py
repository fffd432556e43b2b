# ruff: noqa: PLR6301
"""Logging for sqlbridge.

Only the driver layer logs: statements at DEBUG after they run, and error
messages before an exception propagates. The interpolation and decoding core
never logs.

Statement records carry an ``extra_fields`` mapping with the ``command``, the
``bind_count`` and, for executed statements, ``duration_ms``. Both formatters
below read it: :class:`StructuredFormatter` merges it into the JSON entry and
:class:`ColoredFormatter` shows the duration next to the SQL.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

from sqlbridge._serialization import encode_json
from sqlbridge.exceptions import ImproperConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from logging import LogRecord
    from typing import TextIO

__all__ = (
    "ColoredFormatter",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "statement_fields",
)

_ROOT_LOGGER_NAME = "sqlbridge"

_RESET = "\033[0m"
_MAGENTA = "\033[35m"
_CYAN = "\033[36m"
_RED = "\033[31m"


def statement_fields(command: str, bind_values: Sequence[Any], duration: float | None = None) -> dict[str, Any]:
    """Build the ``extra_fields`` mapping attached to statement log records.

    Args:
        command: The SQL command.
        bind_values: Bind values passed to the statement.
        duration: Execution time in seconds, when the statement ran.

    Returns:
        Mapping for ``logger.debug(..., extra={"extra_fields": ...})``.
    """
    fields: dict[str, Any] = {"command": command, "bind_count": len(bind_values)}
    if duration is not None:
        fields["duration_ms"] = round(duration * 1000, 3)
    return fields


def _extra_fields(record: LogRecord) -> dict[str, Any]:
    fields = getattr(record, "extra_fields", None)
    return fields if isinstance(fields, dict) else {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, statement fields merged in."""

    def format(self, record: LogRecord) -> str:
        """Format log record as structured JSON.

        Args:
            record: The log record to format

        Returns:
            JSON formatted log entry
        """
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(_extra_fields(record))
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return encode_json(log_entry)


class ColoredFormatter(logging.Formatter):
    """Terminal formatter highlighting executed SQL and errors.

    DEBUG records are statements and render as ``SQL ~ <statement>``, with the
    duration when known; ERROR and CRITICAL records render in red.
    """

    def format(self, record: LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.DEBUG:
            duration = _extra_fields(record).get("duration_ms")
            label = "SQL" if duration is None else f"SQL ({duration}ms)"
            return f"{_MAGENTA}{label}{_RESET} {_CYAN}~{_RESET} {message}"
        if record.levelno >= logging.ERROR:
            return f"{_RED}{record.levelname} ~ {message}{_RESET}"
        return f"{record.levelname} ~ {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger in the ``sqlbridge`` namespace.

    Args:
        name: Logger name, prefixed with ``sqlbridge.`` unless it already is.

    Returns:
        The logger.
    """
    if name is None:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name != _ROOT_LOGGER_NAME and not name.startswith(f"{_ROOT_LOGGER_NAME}."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "colored",
    stream: TextIO | None = None,
    extra_handlers: Sequence[logging.Handler] | None = None,
) -> logging.Logger:
    """Attach a handler to the ``sqlbridge`` logger.

    Set ``level`` to ``DEBUG`` to see every executed statement.

    Args:
        level: Logging level name.
        format_style: ``"colored"`` for terminal output, ``"structured"`` for JSON lines.
        stream: Stream to write to, ``sys.stderr`` by default.
        extra_handlers: Additional handlers to add.

    Raises:
        ImproperConfigurationError: If ``level`` or ``format_style`` is unknown.

    Returns:
        The configured ``sqlbridge`` logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        msg = f"Unknown log level {level!r}"
        raise ImproperConfigurationError(msg)

    formatter: logging.Formatter
    if format_style == "colored":
        formatter = ColoredFormatter()
    elif format_style == "structured":
        formatter = StructuredFormatter()
    else:
        msg = f"Unknown log format style {format_style!r}"
        raise ImproperConfigurationError(msg)

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    for extra_handler in extra_handlers or ():
        root_logger.addHandler(extra_handler)

    root_logger.propagate = False
    return root_logger
