"""Tests for the exception hierarchy."""

import pytest

from sqlbridge.exceptions import (
    ArityMismatchError,
    ConnectionOpenError,
    DecodeError,
    ExtraParameterError,
    ImproperConfigurationError,
    MissingParameterError,
    ParameterError,
    SerializationError,
    SQLBridgeError,
    SQLParsingError,
    UnregisteredDriverError,
    UnterminatedConstructError,
)


@pytest.mark.parametrize(
    "exc_class",
    [
        ImproperConfigurationError,
        UnregisteredDriverError,
        ConnectionOpenError,
        SQLParsingError,
        UnterminatedConstructError,
        ParameterError,
        ArityMismatchError,
        MissingParameterError,
        ExtraParameterError,
        SerializationError,
        DecodeError,
    ],
)
def test_all_errors_derive_from_base(exc_class: "type[Exception]") -> None:
    assert issubclass(exc_class, SQLBridgeError)


def test_detail_from_args() -> None:
    exc = SQLBridgeError("something failed")
    assert exc.detail == "something failed"
    assert str(exc) == "something failed"
    assert repr(exc) == "SQLBridgeError - something failed"


def test_detail_keyword() -> None:
    exc = SQLBridgeError("context", detail="specifics")
    assert str(exc) == "context specifics"


def test_empty_error_repr() -> None:
    assert repr(SQLBridgeError()) == "SQLBridgeError"


def test_arity_message() -> None:
    exc = MissingParameterError(expected=3, actual=2, sql="SELECT ?, ?, ?")
    assert isinstance(exc, ArityMismatchError)
    assert str(exc) == "Bind parameter mismatch (2 for 3)\nSQL: SELECT ?, ?, ?"
    assert exc.sql == "SELECT ?, ?, ?"


def test_arity_message_without_sql() -> None:
    assert str(ExtraParameterError(expected=1, actual=2)) == "Bind parameter mismatch (2 for 1)"


def test_unterminated_message() -> None:
    exc = UnterminatedConstructError("SELECT 'x", "single_quoted", 7)
    assert isinstance(exc, SQLParsingError)
    assert str(exc) == "Unterminated single quoted starting at offset 7\nSQL: SELECT 'x"


def test_decode_error() -> None:
    exc = DecodeError("abc", "float")
    assert isinstance(exc, ValueError)
    assert str(exc) == "Cannot decode 'abc' as float"
    assert (exc.value, exc.target) == ("abc", "float")


def test_connection_open_error_default_message() -> None:
    assert "did not provide a reason" in str(ConnectionOpenError())
    assert str(ConnectionOpenError("refused")) == "refused"


def test_unregistered_driver() -> None:
    exc = UnregisteredDriverError("mysql")
    assert str(exc) == "Unregistered driver 'mysql'"
    assert exc.driver == "mysql"
