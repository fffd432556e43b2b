"""Rendering of bind values as SQL literals.

Bind values form a closed set of kinds (:class:`BindKind`). Every value is
classified exactly once and rendered by an exhaustive branch per kind:

- ``NULL``: ``None`` becomes ``NULL``
- ``INTEGER`` / ``FLOAT``: numeric text, unquoted
- ``TEXT``: passed through the driver's quote function and single-quoted
- ``OTHER``: converted to text first, then rendered as ``TEXT``
"""

import math
from collections.abc import Mapping
from datetime import date, time
from enum import Enum
from functools import singledispatch
from typing import TYPE_CHECKING, Any, Callable, Optional

from typing_extensions import assert_never

if TYPE_CHECKING:
    from sqlbridge.typing import BindValue, QuoteFn

__all__ = ("BindKind", "TypeCoercionMap", "classify_bind_value", "quote_text", "render_literal", "to_text")

TypeCoercionMap = Mapping[type, Callable[[Any], Any]]


class BindKind(str, Enum):
    """Kinds of positional bind value."""

    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def classify_bind_value(value: Any) -> BindKind:
    """Classify a bind value.

    ``bool`` is an ``int`` subclass in Python but is not rendered as a number,
    so it is classified as ``OTHER``.

    Args:
        value: The bind value.

    Returns:
        The kind used to render the value.
    """
    if value is None:
        return BindKind.NULL
    if isinstance(value, bool):
        return BindKind.OTHER
    if isinstance(value, int):
        return BindKind.INTEGER
    if isinstance(value, float):
        return BindKind.FLOAT
    if isinstance(value, str):
        return BindKind.TEXT
    return BindKind.OTHER


@singledispatch
def to_text(value: Any) -> str:
    """Canonical text for a bind value of kind ``OTHER``."""
    return str(value)


@to_text.register(bool)
def _bool_to_text(value: bool) -> str:
    return "true" if value else "false"


@to_text.register(bytes)
@to_text.register(bytearray)
@to_text.register(memoryview)
def _bytes_to_text(value: "bytes | bytearray | memoryview") -> str:
    return bytes(value).decode("utf-8")


@to_text.register(date)
@to_text.register(time)
def _temporal_to_text(value: "date | time") -> str:
    return value.isoformat()


@to_text.register(Enum)
def _enum_to_text(value: Enum) -> str:
    return to_text(value.value)


def quote_text(text: str, quote: "QuoteFn") -> str:
    """Escape ``text`` with the driver's quote function and wrap it in single quotes.

    Raises:
        TypeError: If the quote function does not return a string.
    """
    escaped = quote(text)
    if not isinstance(escaped, str):
        msg = f"Quote function must return str, not {type(escaped).__name__}"
        raise TypeError(msg)
    return f"'{escaped}'"


def _lookup_coercion(value: Any, type_coercion_map: "Optional[TypeCoercionMap]") -> "Optional[Callable[[Any], Any]]":
    if not type_coercion_map:
        return None
    for klass in type(value).__mro__:
        converter = type_coercion_map.get(klass)
        if converter is not None:
            return converter
    return None


def _render_float(value: float, quote: "QuoteFn") -> str:
    if math.isfinite(value):
        return float.__repr__(value)
    if math.isnan(value):
        return quote_text("NaN", quote)
    return quote_text("Infinity" if value > 0 else "-Infinity", quote)


def render_literal(value: "BindValue", quote: "QuoteFn", type_coercion_map: "Optional[TypeCoercionMap]" = None) -> str:
    """Render one bind value as SQL text.

    Values of kind ``OTHER`` are first passed through a matching entry of
    ``type_coercion_map`` (looked up along the value's MRO); the result is then
    rendered by its own kind. Values that are still ``OTHER`` are converted with
    :func:`to_text`.

    Non-finite floats have no numeric literal and render as the quoted
    ``'Infinity'``, ``'-Infinity'`` and ``'NaN'`` sentinels.

    Args:
        value: The bind value.
        quote: Driver supplied escaping function for text.
        type_coercion_map: Optional per-type converters.

    Returns:
        SQL literal text.
    """
    kind = classify_bind_value(value)
    if kind is BindKind.OTHER:
        converter = _lookup_coercion(value, type_coercion_map)
        if converter is not None:
            value = converter(value)
            kind = classify_bind_value(value)
        if kind is BindKind.OTHER:
            value = to_text(value)
            kind = BindKind.TEXT

    if kind is BindKind.NULL:
        return "NULL"
    if kind is BindKind.INTEGER:
        return int.__repr__(value)
    if kind is BindKind.FLOAT:
        return _render_float(value, quote)
    if kind is BindKind.TEXT:
        return quote_text(value, quote)
    if kind is BindKind.OTHER:
        msg = "OTHER values are converted to TEXT before rendering"
        raise AssertionError(msg)
    assert_never(kind)
