"""Prepared statements.

A :class:`Statement` wraps any executor exposing ``command`` and
``execute(*bind_values)``. Drivers with native prepared statements supply their
own executor; the others get :class:`EmulatedStatementExecutor`, which hands the
command and bind values back to :meth:`DriverBase.execute` on every call.
"""

import logging
import time
from typing import TYPE_CHECKING, Any, Optional, Protocol

from sqlbridge.exceptions import SQLBridgeError
from sqlbridge.utils.logging import get_logger, statement_fields

if TYPE_CHECKING:
    from sqlbridge.core.result import Result
    from sqlbridge.driver._base import DriverBase

__all__ = ("EmulatedStatementExecutor", "Statement", "StatementExecutor")

logger = get_logger("driver.statement")


class StatementExecutor(Protocol):
    """Interface for objects that run a prepared command."""

    @property
    def command(self) -> str: ...

    def execute(self, *bind_values: Any) -> "Result": ...


class EmulatedStatementExecutor:
    """Fallback executor for drivers without native prepared statements."""

    __slots__ = ("_command", "_driver")

    def __init__(self, driver: "DriverBase", command: str) -> None:
        self._driver = driver
        self._command = command

    @property
    def command(self) -> str:
        return self._command

    @property
    def driver(self) -> "DriverBase":
        return self._driver

    def execute(self, *bind_values: Any) -> "Result":
        """Execute the command with ``bind_values`` in place of its ``?`` markers."""
        return self._driver.execute(self._command, *bind_values)


class Statement:
    """A prepared statement.

    Executed statements are logged at DEBUG, with their bind values when there
    are any. Failures are logged at ERROR before the exception propagates.

    Args:
        executor: Object running the command.
        logger: Logger to report to; defaults to the ``sqlbridge.driver.statement`` logger.
    """

    __slots__ = ("_executor", "_logger")

    def __init__(self, executor: StatementExecutor, logger: Optional[logging.Logger] = None) -> None:
        self._executor = executor
        self._logger = logger

    @property
    def command(self) -> str:
        return self._executor.command

    @property
    def logger(self) -> logging.Logger:
        return self._logger if self._logger is not None else logger

    def execute(self, *bind_values: Any) -> "Result":
        """Execute the statement.

        Log records carry ``command`` and ``bind_count`` in ``extra_fields``,
        plus ``duration_ms`` once the statement has run.

        Args:
            *bind_values: Values for the ``?`` placeholders, in order.

        Raises:
            SQLBridgeError: Any error raised by the executor, after it is logged.

        Returns:
            The execution result.
        """
        started = time.perf_counter()
        try:
            result = self._executor.execute(*bind_values)
        except SQLBridgeError as exc:
            self.logger.error(str(exc), extra={"extra_fields": statement_fields(self.command, bind_values)})
            raise
        if self.logger.isEnabledFor(logging.DEBUG):
            extra = {"extra_fields": statement_fields(self.command, bind_values, time.perf_counter() - started)}
            if bind_values:
                self.logger.debug("%s <Bind: %r>", self.command, list(bind_values), extra=extra)
            else:
                self.logger.debug("%s", self.command, extra=extra)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(command={self.command!r})"
