from typing import Any, Optional

__all__ = (
    "ArityMismatchError",
    "ConnectionOpenError",
    "DecodeError",
    "ExtraParameterError",
    "ImproperConfigurationError",
    "MissingParameterError",
    "ParameterError",
    "SQLBridgeError",
    "SQLParsingError",
    "SerializationError",
    "UnregisteredDriverError",
    "UnterminatedConstructError",
)


class SQLBridgeError(Exception):
    """Base exception class from which all sqlbridge exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBridgeError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLBridgeError):
    """Connection options could not be understood."""


class UnregisteredDriverError(SQLBridgeError):
    """No driver is registered under the requested name."""

    driver: Optional[str]

    def __init__(self, driver: Optional[str]) -> None:
        super().__init__(detail=f"Unregistered driver {driver!r}")
        self.driver = driver


class ConnectionOpenError(SQLBridgeError):
    """A driver failed to open its connection without giving a reason."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Unable to establish connection, but the driver did not provide a reason."
        super().__init__(message)


class SQLParsingError(SQLBridgeError):
    """Issues scanning SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues scanning SQL statement."
        super().__init__(message)


class UnterminatedConstructError(SQLParsingError):
    """The SQL ended inside a quoted literal or a block comment."""

    sql: str
    state: str
    position: int

    def __init__(self, sql: str, state: str, position: int) -> None:
        """Initialize with the offending SQL and where the construct was opened.

        Args:
            sql: The SQL template being scanned.
            state: Name of the construct left open (e.g. ``single_quoted``).
            position: Offset at which the unterminated construct starts.
        """
        super().__init__(f"Unterminated {state.replace('_', ' ')} starting at offset {position}\nSQL: {sql}")
        self.sql = sql
        self.state = state
        self.position = position


class ParameterError(SQLBridgeError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ArityMismatchError(ParameterError):
    """The number of placeholders does not match the number of bind values."""

    expected: int
    actual: int

    def __init__(self, expected: int, actual: int, sql: Optional[str] = None) -> None:
        """Initialize with both counts.

        Args:
            expected: Placeholders found in the SQL.
            actual: Bind values supplied.
            sql: The SQL template.
        """
        super().__init__(f"Bind parameter mismatch ({actual} for {expected})", sql)
        self.expected = expected
        self.actual = actual


class MissingParameterError(ArityMismatchError):
    """Raised when fewer bind values than placeholders are supplied."""


class ExtraParameterError(ArityMismatchError):
    """Raised when more bind values than placeholders are supplied."""


class SerializationError(SQLBridgeError):
    """Encoding or decoding of an object failed."""


class DecodeError(SerializationError, ValueError):
    """A raw scalar does not match the grammar of the requested type."""

    value: str
    target: str

    def __init__(self, value: Any, target: str) -> None:
        super().__init__(detail=f"Cannot decode {value!r} as {target}")
        self.value = value
        self.target = target
