"""Driver layer: base class, prepared statements and executors."""

from sqlbridge.driver._base import DriverBase
from sqlbridge.driver.statement import EmulatedStatementExecutor, Statement, StatementExecutor

__all__ = ("DriverBase", "EmulatedStatementExecutor", "Statement", "StatementExecutor")
