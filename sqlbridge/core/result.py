"""Result container returned by :meth:`DriverBase.execute`.

Read and write statements both produce a :class:`Result`: an ordered list of
rows keyed by column name, plus a metadata mapping supplied by the driver.
Recognised metadata keys are ``count``, ``rows_affected``, ``insert_id`` and
``execution_time``; drivers may add their own.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from mypy_extensions import mypyc_attr

from sqlbridge.exceptions import SQLBridgeError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlbridge.typing import ResultInfo

__all__ = ("Result",)


@mypyc_attr(allow_interpreted_subclasses=True)
class Result:
    """Rows and metadata produced by one statement execution.

    Args:
        rows: Row mappings provided by the driver.
        info: Metadata about the execution.
    """

    __slots__ = ("_info", "_rows")

    def __init__(self, rows: "Iterable[Mapping[str, Any]]", info: "Optional[ResultInfo]" = None) -> None:
        self._rows: list[Mapping[str, Any]] = list(rows)
        self._info: dict[str, Any] = dict(info) if info is not None else {}

    @property
    def info(self) -> "dict[str, Any]":
        """Raw metadata provided by the driver."""
        return self._info

    def get_metadata(self, key: str, default: Any = None) -> Any:
        """Get metadata value by key.

        Args:
            key: The metadata key to retrieve.
            default: Default value if key is not found.

        Returns:
            The metadata value or default.
        """
        return self._info.get(key, default)

    def count(self) -> int:
        """Number of rows in the result.

        Uses the ``count`` reported by the driver when there is one, which may
        differ from the rows held here when the driver pages results.
        """
        reported = self._info.get("count")
        if reported is None:
            return len(self._rows)
        return int(reported)

    @property
    def rows_affected(self) -> int:
        return int(self._info.get("rows_affected") or 0)

    @property
    def insert_id(self) -> "Optional[Union[int, str]]":
        return self._info.get("insert_id")

    @property
    def execution_time(self) -> "Optional[float]":
        """Execution time in seconds, if the driver measured it."""
        return self._info.get("execution_time")

    def first(self) -> "Optional[Mapping[str, Any]]":
        """Get the first row from the result, if any."""
        return self._rows[0] if self._rows else None

    def one(self) -> "Mapping[str, Any]":
        """Return exactly one row.

        Raises:
            SQLBridgeError: If the result does not hold exactly one row.
        """
        if len(self._rows) != 1:
            msg = f"Expected exactly one row, found {len(self._rows)}"
            raise SQLBridgeError(msg)
        return self._rows[0]

    def all(self) -> "list[Mapping[str, Any]]":
        """Return all rows as a list."""
        return list(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> "Mapping[str, Any]":
        return self._rows[index]

    def __iter__(self) -> "Iterator[Mapping[str, Any]]":
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={len(self._rows)}, info={self._info!r})"
