"""Tests for sqlbridge logging helpers."""

import io
import logging
import sys
from collections.abc import Iterator
from typing import Any, Optional

import pytest

from sqlbridge._serialization import decode_json
from sqlbridge.exceptions import ImproperConfigurationError
from sqlbridge.utils.logging import (
    ColoredFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
    statement_fields,
)


def _record(
    level: int = logging.INFO,
    msg: str = "hello %s",
    args: tuple = ("world",),
    extra_fields: "Optional[dict[str, Any]]" = None,
) -> logging.LogRecord:
    record = logging.LogRecord("sqlbridge.test", level, __file__, 10, msg, args, None)
    if extra_fields is not None:
        record.extra_fields = extra_fields
    return record


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger("sqlbridge")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_get_logger_prefixes_namespace() -> None:
    assert get_logger("driver.sqlite").name == "sqlbridge.driver.sqlite"
    assert get_logger("sqlbridge.registry").name == "sqlbridge.registry"
    assert get_logger("sqlbridgeish").name == "sqlbridge.sqlbridgeish"
    assert get_logger().name == "sqlbridge"


def test_statement_fields() -> None:
    assert statement_fields("SELECT ?", ("a",)) == {"command": "SELECT ?", "bind_count": 1}
    fields = statement_fields("SELECT 1", (), 0.002)
    assert fields == {"command": "SELECT 1", "bind_count": 0, "duration_ms": 2.0}


def test_structured_formatter_merges_statement_fields() -> None:
    record = _record(logging.DEBUG, "SELECT %s", (1,), statement_fields("SELECT ?", (1,), 0.5))
    entry = decode_json(StructuredFormatter().format(record))
    assert entry["message"] == "SELECT 1"
    assert entry["level"] == "DEBUG"
    assert entry["logger"] == "sqlbridge.test"
    assert entry["command"] == "SELECT ?"
    assert entry["bind_count"] == 1
    assert entry["duration_ms"] == 500.0


def test_structured_formatter_plain_record() -> None:
    entry = decode_json(StructuredFormatter().format(_record()))
    assert set(entry) == {"timestamp", "level", "logger", "message"}


def test_structured_formatter_exception() -> None:
    try:
        raise ValueError("bad")
    except ValueError:
        record = logging.LogRecord("sqlbridge.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    entry = decode_json(StructuredFormatter().format(record))
    assert "ValueError: bad" in entry["exception"]


def test_colored_formatter_statement() -> None:
    text = ColoredFormatter().format(_record(logging.DEBUG, "SELECT %s", (1,)))
    assert text == "\033[35mSQL\033[0m \033[36m~\033[0m SELECT 1"


def test_colored_formatter_statement_with_duration() -> None:
    record = _record(logging.DEBUG, "SELECT 1", (), {"command": "SELECT 1", "bind_count": 0, "duration_ms": 0.42})
    assert ColoredFormatter().format(record) == "\033[35mSQL (0.42ms)\033[0m \033[36m~\033[0m SELECT 1"


def test_colored_formatter_error() -> None:
    text = ColoredFormatter().format(_record(logging.ERROR, "boom", ()))
    assert text == "\033[31mERROR ~ boom\033[0m"


def test_colored_formatter_info() -> None:
    assert ColoredFormatter().format(_record()) == "INFO ~ hello world"


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_structured_output() -> None:
    stream = io.StringIO()
    handler = logging.NullHandler()
    root = configure_logging(level="debug", format_style="structured", stream=stream, extra_handlers=[handler])
    assert root.name == "sqlbridge"
    assert root.level == logging.DEBUG
    assert handler in root.handlers
    assert not root.propagate

    get_logger("driver.test").debug("SELECT 1", extra={"extra_fields": statement_fields("SELECT 1", ())})
    entry = decode_json(stream.getvalue().strip())
    assert entry["command"] == "SELECT 1"
    assert entry["bind_count"] == 0


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_colored_output() -> None:
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream)
    get_logger("driver.test").error("boom")
    assert stream.getvalue() == "\033[31mERROR ~ boom\033[0m\n"


@pytest.mark.usefixtures("restore_root_logger")
@pytest.mark.parametrize(("level", "style"), [("LOUD", "colored"), ("INFO", "xml")])
def test_configure_logging_rejects_unknown_settings(level: str, style: str) -> None:
    with pytest.raises(ImproperConfigurationError):
        configure_logging(level=level, format_style=style)
