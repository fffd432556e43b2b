from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Union

from typing_extensions import TypeAlias

from sqlbridge.core.calendar import ProlepticDate

__all__ = ("BindValue", "DecodedValue", "QuoteFn", "ResultInfo")


BindValue: TypeAlias = "Union[None, int, float, str, Any]"
"""Type alias for a positional bind value.

Represents:
- :type:`None` rendered as ``NULL``
- :type:`int` and :type:`float` rendered as numeric literals
- :type:`str` quoted by the driver
- anything else, converted to text and then quoted
"""
QuoteFn: TypeAlias = Callable[[str], str]
"""Driver supplied function escaping text for a single-quoted SQL literal."""
DecodedValue: TypeAlias = Union[float, Decimal, ProlepticDate, datetime]
"""Type alias for values produced by :mod:`sqlbridge.core.decoding`."""
ResultInfo: TypeAlias = "Mapping[str, Any]"
"""Type alias for result metadata (``count``, ``rows_affected``, ``insert_id``, ``execution_time``)."""
