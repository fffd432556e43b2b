"""Decoders for raw scalar text returned by a backend.

Drivers call these on the textual values of their wire format before placing
them into result rows. Each decoder accepts a documented grammar and raises
:class:`~sqlbridge.exceptions.DecodeError` for anything else:

- :func:`decode_float`: decimal or exponent notation plus ``Infinity``,
  ``-Infinity`` and ``NaN``
- :func:`decode_decimal`: the same grammar into an exact :class:`~decimal.Decimal`
- :func:`decode_date`: ``YYYY-MM-DD`` with an optional ``BC`` / ``AD`` marker
- :func:`decode_datetime_with_zone`: date and time followed by a UTC offset
- :func:`decode_datetime_without_zone`: date and time read in the local zone
"""

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

from typing_extensions import assert_never

from sqlbridge.core.calendar import ProlepticDate
from sqlbridge.exceptions import DecodeError

if TYPE_CHECKING:
    from sqlbridge.typing import DecodedValue

__all__ = (
    "DecodeKind",
    "decode_date",
    "decode_datetime_with_zone",
    "decode_datetime_without_zone",
    "decode_decimal",
    "decode_float",
    "decode_value",
    "system_time_zone",
)

_NUMBER_RE: Final = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_FLOAT_SENTINELS: Final[dict[str, float]] = {
    "Infinity": float("inf"),
    "-Infinity": float("-inf"),
    "NaN": float("nan"),
}
_DECIMAL_SENTINELS: Final[frozenset[str]] = frozenset({"Infinity", "-Infinity", "NaN"})

_DATE_RE: Final = re.compile(
    r"(?P<sign>-)?(?P<year>[0-9]+)-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})(?:\s+(?P<era>BC|AD))?",
    re.IGNORECASE,
)

_DATETIME_RE: Final = re.compile(
    r"""
    (?P<year>[0-9]{4,})-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})
    [T\x20]
    (?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})
    (?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,6}))?)?
    \s*
    (?P<zone>Z|UTC|GMT|[+-][0-9]{2}(?::?[0-9]{2}(?::?[0-9]{2})?)?)
    (?:\s+(?P<era>BC|AD))?
    """,
    re.IGNORECASE | re.VERBOSE,
)

_UTC_DESIGNATORS: Final[frozenset[str]] = frozenset({"Z", "UTC", "GMT"})


class DecodeKind(str, Enum):
    """Target types understood by :func:`decode_value`."""

    FLOAT = "float"
    DECIMAL = "decimal"
    DATE = "date"
    DATETIME_WITH_ZONE = "datetime_with_zone"
    DATETIME_WITHOUT_ZONE = "datetime_without_zone"

    def __str__(self) -> str:
        return self.value


def _require_text(value: Any, target: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(value, target)
    return value


def decode_float(value: str) -> float:
    """Convert text to a float, honouring ``Infinity``, ``-Infinity`` and ``NaN``.

    Args:
        value: Decimal or exponent formatted number, or one of the sentinels.

    Raises:
        DecodeError: If the text is not a number.

    Returns:
        The float value.
    """
    text = _require_text(value, "float")
    sentinel = _FLOAT_SENTINELS.get(text)
    if sentinel is not None:
        return sentinel
    if _NUMBER_RE.fullmatch(text) is None:
        raise DecodeError(value, "float")
    return float(text)


def decode_decimal(value: str) -> Decimal:
    """Convert text to a :class:`~decimal.Decimal` without going through a float.

    The digits and scale of the input are preserved, so ``"1.20"`` keeps its
    trailing zero. ``NaN``, ``Infinity`` and ``-Infinity`` map to the matching
    special decimals.

    Raises:
        DecodeError: If the text is not a number.
    """
    text = _require_text(value, "decimal")
    if text not in _DECIMAL_SENTINELS and _NUMBER_RE.fullmatch(text) is None:
        raise DecodeError(value, "decimal")
    try:
        return Decimal(text)
    except InvalidOperation as exc:  # pragma: no cover
        raise DecodeError(value, "decimal") from exc


def decode_date(value: str) -> ProlepticDate:
    """Convert text to a :class:`~sqlbridge.core.calendar.ProlepticDate`.

    A trailing ``BC`` marker converts the year to astronomical numbering, so
    ``"431-09-22 BC"`` becomes year ``-430``. Without a marker the year is read
    as written and may carry a leading minus sign.

    Raises:
        DecodeError: If the text is not a valid date.
    """
    text = _require_text(value, "date")
    match = _DATE_RE.fullmatch(text)
    if match is None:
        raise DecodeError(value, "date")

    year = int(match["year"])
    era = match["era"]
    if era is not None:
        if match["sign"] or year < 1:
            raise DecodeError(value, "date")
        if era.upper() == "BC":
            year = 1 - year
    elif match["sign"]:
        year = -year

    try:
        return ProlepticDate(year, int(match["month"]), int(match["day"]))
    except ValueError as exc:
        raise DecodeError(value, "date") from exc


def _parse_zone(zone: str) -> timezone:
    if zone.upper() in _UTC_DESIGNATORS:
        return timezone.utc
    digits = zone[1:].replace(":", "")
    offset = timedelta(hours=int(digits[0:2]), minutes=int(digits[2:4] or 0), seconds=int(digits[4:6] or 0))
    return timezone(-offset if zone[0] == "-" else offset)


def decode_datetime_with_zone(value: str) -> datetime:
    """Convert text carrying an explicit zone to an aware :class:`~datetime.datetime`.

    Accepted zones are ``Z``, ``UTC``, ``GMT`` and numeric offsets written as
    ``+HH``, ``+HHMM``, ``+HH:MM`` or ``+HH:MM:SS``.

    Raises:
        DecodeError: If the text has no zone or is not a valid date and time.
    """
    text = _require_text(value, "datetime")
    match = _DATETIME_RE.fullmatch(text)
    if match is None:
        raise DecodeError(value, "datetime")
    era = match["era"]
    if era is not None and era.upper() == "BC":
        raise DecodeError(value, "datetime")

    fraction = match["fraction"] or ""
    try:
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"] or 0),
            int(fraction.ljust(6, "0")),
            tzinfo=_parse_zone(match["zone"]),
        )
    except ValueError as exc:
        raise DecodeError(value, "datetime") from exc


def system_time_zone() -> str:
    """Get the current UTC offset of the local system as ``+HH:MM`` or ``-HH:MM``.

    The offset is read on every call and reflects daylight saving changes.
    Drivers should use it to tell the backend which zone the client runs in.
    """
    offset = datetime.now().astimezone().utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def decode_datetime_without_zone(value: str) -> datetime:
    """Convert zone-less text to a :class:`~datetime.datetime` in the local zone.

    Equivalent to ``decode_datetime_with_zone(value + system_time_zone())``.

    Raises:
        DecodeError: If the text is not a valid zone-less date and time.
    """
    text = _require_text(value, "datetime")
    try:
        return decode_datetime_with_zone(text + system_time_zone())
    except DecodeError as exc:
        raise DecodeError(value, "datetime") from exc


def decode_value(kind: DecodeKind, value: str) -> "DecodedValue":
    """Decode ``value`` into the type named by ``kind``.

    Raises:
        DecodeError: If the text does not match the grammar of the target type.
    """
    if kind is DecodeKind.FLOAT:
        return decode_float(value)
    if kind is DecodeKind.DECIMAL:
        return decode_decimal(value)
    if kind is DecodeKind.DATE:
        return decode_date(value)
    if kind is DecodeKind.DATETIME_WITH_ZONE:
        return decode_datetime_with_zone(value)
    if kind is DecodeKind.DATETIME_WITHOUT_ZONE:
        return decode_datetime_without_zone(value)
    assert_never(kind)
