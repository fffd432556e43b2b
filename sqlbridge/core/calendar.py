"""Dates on the proleptic Gregorian calendar.

:class:`datetime.date` stops at year 1, but databases such as PostgreSQL
return dates thousands of years before the common era. ``ProlepticDate`` keeps
astronomical year numbering, where year ``0`` is 1 BC and year ``-430`` is
431 BC, so every value a backend can produce has a representation.
"""

from datetime import MAXYEAR, MINYEAR, date
from typing import Any, Final, Optional

from mypy_extensions import mypyc_attr

__all__ = ("ProlepticDate", "days_in_month", "is_leap_year")

_DAYS_IN_MONTH: Final[tuple[int, ...]] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True if the astronomical ``year`` is a proleptic Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` of the astronomical ``year``.

    Raises:
        ValueError: If month is outside 1..12.
    """
    if not 1 <= month <= 12:  # noqa: PLR2004
        msg = f"month must be in 1..12, not {month}"
        raise ValueError(msg)
    if month == 2 and is_leap_year(year):  # noqa: PLR2004
        return 29
    return _DAYS_IN_MONTH[month - 1]


@mypyc_attr(allow_interpreted_subclasses=True)
class ProlepticDate:
    """Immutable calendar date with astronomical year numbering.

    Args:
        year: Astronomical year; ``0`` is 1 BC, ``-1`` is 2 BC.
        month: Month, 1 to 12.
        day: Day of month.

    Raises:
        ValueError: If month or day is out of range for the given year.
    """

    __slots__ = ("_day", "_month", "_year")

    def __init__(self, year: int, month: int, day: int) -> None:
        if not 1 <= day <= days_in_month(year, month):
            msg = f"day {day} is out of range for {year:04d}-{month:02d}"
            raise ValueError(msg)
        object.__setattr__(self, "_year", year)
        object.__setattr__(self, "_month", month)
        object.__setattr__(self, "_day", day)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @classmethod
    def from_date(cls, value: date) -> "ProlepticDate":
        """Build from a :class:`datetime.date`."""
        return cls(value.year, value.month, value.day)

    @property
    def year(self) -> int:
        """Astronomical year."""
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @property
    def is_bc(self) -> bool:
        """True for dates before 1 AD."""
        return self._year < 1

    @property
    def era_year(self) -> int:
        """Year as written with an era marker, e.g. ``431`` for 431 BC."""
        return 1 - self._year if self.is_bc else self._year

    def to_date(self) -> date:
        """Convert to :class:`datetime.date`.

        Raises:
            ValueError: If the year cannot be represented by ``datetime.date``.
        """
        if not MINYEAR <= self._year <= MAXYEAR:
            msg = f"year {self._year} is out of range for datetime.date"
            raise ValueError(msg)
        return date(self._year, self._month, self._day)

    def isoformat(self) -> str:
        """Format as ``YYYY-MM-DD``, with a trailing ``BC`` before the common era."""
        text = f"{self.era_year:04d}-{self._month:02d}-{self._day:02d}"
        return f"{text} BC" if self.is_bc else text

    def _key(self) -> tuple[int, int, int]:
        return (self._year, self._month, self._day)

    def _coerce(self, other: object) -> "Optional[tuple[int, int, int]]":
        if isinstance(other, ProlepticDate):
            return other._key()
        # datetime is a date subclass but carries a time component
        if isinstance(other, date) and not hasattr(other, "hour"):
            return (other.year, other.month, other.day)
        return None

    def __eq__(self, other: object) -> bool:
        key = self._coerce(other)
        if key is None:
            return NotImplemented
        return self._key() == key

    def __lt__(self, other: object) -> bool:
        key = self._coerce(other)
        if key is None:
            return NotImplemented
        return self._key() < key

    def __le__(self, other: object) -> bool:
        key = self._coerce(other)
        if key is None:
            return NotImplemented
        return self._key() <= key

    def __gt__(self, other: object) -> bool:
        key = self._coerce(other)
        if key is None:
            return NotImplemented
        return self._key() > key

    def __ge__(self, other: object) -> bool:
        key = self._coerce(other)
        if key is None:
            return NotImplemented
        return self._key() >= key

    def __hash__(self) -> int:
        if MINYEAR <= self._year <= MAXYEAR:
            return hash(self.to_date())
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._year}, {self._month}, {self._day})"

    def __str__(self) -> str:
        return self.isoformat()
