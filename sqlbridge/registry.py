"""Driver registry and connection factory.

Drivers are not discovered through import side effects. The application owns a
:class:`DriverRegistry`, registers the driver classes it wants under URI scheme
names, and opens connections through :meth:`DriverRegistry.connect`.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from sqlbridge.config import ConnectionConfig, normalize_options
from sqlbridge.exceptions import ConnectionOpenError, ImproperConfigurationError, UnregisteredDriverError
from sqlbridge.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlbridge.driver._base import DriverBase

__all__ = ("DriverRegistry",)

logger = get_logger("registry")


class DriverRegistry:
    """Mapping of driver names to driver classes.

    Names are case-insensitive and kept in registration order.
    """

    __slots__ = ("_drivers",)

    def __init__(self, drivers: "Optional[Mapping[str, type[DriverBase]]]" = None) -> None:
        self._drivers: "dict[str, type[DriverBase]]" = {}
        if drivers:
            for name, driver_class in drivers.items():
                self.register(name, driver_class)

    @staticmethod
    def _key(name: str) -> str:
        return str(name).casefold()

    def register(self, name: str, driver_class: "type[DriverBase]", *, replace: bool = False) -> None:
        """Register a driver class for a URI scheme name.

        Args:
            name: The URI scheme, e.g. ``sqlite``.
            driver_class: The driver class to instantiate for this scheme.
            replace: Allow replacing a driver already registered under ``name``.

        Raises:
            ImproperConfigurationError: If ``name`` is empty or already registered and ``replace`` is False.
        """
        key = self._key(name)
        if not key:
            msg = "Driver name must not be empty."
            raise ImproperConfigurationError(msg)
        if key in self._drivers and not replace:
            msg = f"Driver {name!r} is already registered to {self._drivers[key].__name__}"
            raise ImproperConfigurationError(msg)
        self._drivers[key] = driver_class
        logger.debug("Registered driver %r as %s", key, driver_class.__name__)

    def unregister(self, name: str) -> "type[DriverBase]":
        """Remove and return the driver registered under ``name``.

        Raises:
            UnregisteredDriverError: If no driver is registered under ``name``.
        """
        try:
            return self._drivers.pop(self._key(name))
        except KeyError:
            raise UnregisteredDriverError(name) from None

    def get(self, name: str) -> "type[DriverBase]":
        """Look up the driver class registered under ``name``.

        Raises:
            UnregisteredDriverError: If no driver is registered under ``name``.
        """
        driver_class = self._drivers.get(self._key(name))
        if driver_class is None:
            raise UnregisteredDriverError(name)
        return driver_class

    def names(self) -> "list[str]":
        """Registered names, in registration order."""
        return list(self._drivers)

    def clear(self) -> None:
        self._drivers.clear()

    def connect(self, options: "Union[str, Mapping[Any, Any], ConnectionConfig]") -> "DriverBase":
        """Instantiate and open the driver named by ``options``.

        Args:
            options: A connection URI, a mapping of options, or a :class:`ConnectionConfig`.

        Raises:
            ImproperConfigurationError: If the options cannot be understood.
            UnregisteredDriverError: If no driver is registered for the requested name.
            ConnectionOpenError: If the driver reports it could not open a connection.

        Returns:
            An open driver.
        """
        config = normalize_options(options)
        driver = self.get(config.driver)(config)
        if not driver.open():
            raise ConnectionOpenError
        logger.debug("Opened %s connection", config.driver)
        return driver

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._drivers

    def __iter__(self) -> "Iterator[str]":
        return iter(list(self._drivers))

    def __len__(self) -> int:
        return len(self._drivers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.names()!r})"
