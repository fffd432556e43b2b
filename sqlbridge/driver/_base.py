"""Abstract base class for backend drivers.

Drivers subclass :class:`DriverBase` and implement the connection lifecycle,
statement execution and text quoting for their backend. Backends without
native bind parameters build literal SQL with :meth:`DriverBase.interpolate`
before sending it; all drivers can use :mod:`sqlbridge.core.decoding` to turn
textual scalars into typed values when building a :class:`Result`.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Union

from sqlbridge.config import ConnectionConfig, normalize_options
from sqlbridge.core.interpolation import InterpolationConfig, count_placeholders, interpolate
from sqlbridge.driver.statement import EmulatedStatementExecutor, Statement
from sqlbridge.exceptions import ConnectionOpenError
from sqlbridge.utils.logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from sqlbridge.core.result import Result

__all__ = ("DriverBase",)


class DriverBase(ABC):
    """Base class every driver subclasses.

    Subclasses MUST implement :meth:`open`, :meth:`close`, :attr:`is_open`,
    :meth:`execute` and :meth:`quote`, and SHOULD override :meth:`prepare` when
    the backend supports prepared statements natively.

    Args:
        options: Connection options as a URI, a mapping or a :class:`ConnectionConfig`.
            Defaults to a config naming only this driver.
        logger: Logger for executed statements.
    """

    __slots__ = ("_logger", "config")

    driver_name: ClassVar[str] = ""
    """Name the driver is usually registered under."""
    interpolation_config: ClassVar[InterpolationConfig] = InterpolationConfig()
    """Scanner behaviour used by :meth:`interpolate`."""

    def __init__(
        self,
        options: "Union[str, Mapping[Any, Any], ConnectionConfig, None]" = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if options is None:
            options = ConnectionConfig(driver=self.driver_name or type(self).__name__.lower())
        self.config = normalize_options(options)
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = get_logger(f"driver.{self.config.driver}")
        return self._logger

    @abstractmethod
    def open(self) -> bool:
        """Open a connection to the backend, if it is not already open.

        Returns:
            True if a connection was opened or was already open, False if not.
        """

    @abstractmethod
    def close(self) -> bool:
        """Close the connection, if it is open.

        Returns:
            True if the connection was closed or was already closed, False if not.
        """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the connection is currently open."""

    @abstractmethod
    def execute(self, sql: str, *bind_values: Any) -> "Result":
        """Execute a read or write statement.

        ``?`` placeholders in ``sql`` are filled from ``bind_values``, natively
        where the backend supports it, otherwise through :meth:`interpolate`.

        Args:
            sql: SQL or DDL to execute.
            *bind_values: Values for the placeholders, in order.

        Returns:
            The result of the statement.
        """

    @abstractmethod
    def quote(self, value: str) -> str:
        """Escape text for a single-quoted literal of this backend.

        Args:
            value: The text to escape.

        Returns:
            The escaped text, without surrounding quotes.
        """

    def interpolate(self, sql: str, bind_values: "Sequence[Any]") -> str:
        """Replace the ``?`` markers in ``sql`` with literal ``bind_values``.

        For drivers whose backend lacks bind parameters, or supports them
        poorly. Values are rendered by type: ``None`` as ``NULL``, ``int`` and
        ``float`` as numbers, text through :meth:`quote` inside single quotes,
        anything else converted to text first.

        Raises:
            ArityMismatchError: If the number of values differs from the number of placeholders.
            UnterminatedConstructError: If ``sql`` ends inside a literal or block comment.
        """
        return interpolate(sql, bind_values, self.quote, self.interpolation_config)

    def count_placeholders(self, sql: str) -> int:
        """Number of bind values ``sql`` expects."""
        return count_placeholders(sql, self.interpolation_config)

    def prepare(self, sql: str) -> Statement:
        """Create a statement to execute later with bind values.

        This default emulates prepared statements by executing ``sql`` anew on
        each call.
        """
        return Statement(EmulatedStatementExecutor(self, sql), self.logger)

    def __enter__(self) -> "Self":
        if not self.open():
            raise ConnectionOpenError
        return self

    def __exit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self.config!r})"
