from __future__ import annotations

from typing import Any

import pytest

from sqlbridge import DriverBase, DriverRegistry, Result
from sqlbridge.driver import Statement


class BackwardsQuoteDriver(DriverBase):
    """Driver without native binds whose quote function reverses text."""

    driver_name = "backwards"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._open = False
        self.executed: list[str] = []

    def open(self) -> bool:
        self._open = True
        return True

    def close(self) -> bool:
        self._open = False
        return True

    @property
    def is_open(self) -> bool:
        return self._open

    def execute(self, sql: str, *bind_values: Any) -> Result:
        self.executed.append(self.interpolate(sql, bind_values))
        return Result([], {"count": 0})

    def quote(self, value: str) -> str:
        return value[::-1]


class NativeStatementDriver(BackwardsQuoteDriver):
    """Driver supplying its own prepared statement executor."""

    driver_name = "native"

    class Executor:
        def __init__(self, command: str) -> None:
            self.command = command

        def execute(self, *bind_values: Any) -> Result:
            return Result([{"bound": list(bind_values)}])

    def prepare(self, sql: str) -> Statement:
        return Statement(self.Executor(sql), self.logger)

    def quote(self, value: str) -> str:
        return "quoted"


class UnopenableDriver(BackwardsQuoteDriver):
    driver_name = "unopenable"

    def open(self) -> bool:
        return False


@pytest.fixture
def reverse() -> Any:
    return lambda text: text[::-1]


@pytest.fixture
def backwards_driver() -> BackwardsQuoteDriver:
    return BackwardsQuoteDriver()


@pytest.fixture
def registry() -> DriverRegistry:
    registry = DriverRegistry()
    registry.register("backwards", BackwardsQuoteDriver)
    registry.register("native", NativeStatementDriver)
    return registry


@pytest.fixture
def native_driver() -> NativeStatementDriver:
    return NativeStatementDriver()


@pytest.fixture
def unopenable_driver_class() -> type[DriverBase]:
    return UnopenableDriver


@pytest.fixture
def backwards_driver_class() -> type[DriverBase]:
    return BackwardsQuoteDriver
