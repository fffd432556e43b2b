"""Tests for proleptic Gregorian dates."""

from datetime import date, datetime

import pytest

from sqlbridge.core.calendar import ProlepticDate, days_in_month, is_leap_year


@pytest.mark.parametrize(("year", "leap"), [(2000, True), (1900, False), (2012, True), (0, True), (-4, True), (-100, False)])
def test_is_leap_year(year: int, leap: bool) -> None:
    assert is_leap_year(year) is leap


def test_days_in_month() -> None:
    assert days_in_month(2012, 2) == 29
    assert days_in_month(2011, 2) == 28
    assert days_in_month(2011, 4) == 30
    with pytest.raises(ValueError):
        days_in_month(2011, 13)


def test_invalid_day() -> None:
    with pytest.raises(ValueError, match="out of range"):
        ProlepticDate(2011, 2, 29)


def test_bc_properties() -> None:
    value = ProlepticDate(-430, 9, 22)
    assert value.is_bc
    assert value.era_year == 431
    assert value.isoformat() == "0431-09-22 BC"
    assert str(value) == "0431-09-22 BC"
    assert repr(value) == "ProlepticDate(-430, 9, 22)"


def test_ad_properties() -> None:
    value = ProlepticDate(2012, 9, 22)
    assert not value.is_bc
    assert value.era_year == 2012
    assert value.isoformat() == "2012-09-22"


def test_to_date() -> None:
    assert ProlepticDate(2012, 9, 22).to_date() == date(2012, 9, 22)
    with pytest.raises(ValueError):
        ProlepticDate(0, 1, 1).to_date()


def test_from_date() -> None:
    assert ProlepticDate.from_date(date(1999, 12, 31)) == ProlepticDate(1999, 12, 31)


def test_equality_with_date() -> None:
    assert ProlepticDate(2012, 9, 22) == date(2012, 9, 22)
    assert date(2012, 9, 22) == ProlepticDate(2012, 9, 22)
    assert ProlepticDate(2012, 9, 22) != datetime(2012, 9, 22)
    assert hash(ProlepticDate(2012, 9, 22)) == hash(date(2012, 9, 22))


def test_ordering() -> None:
    dates = [ProlepticDate(1, 1, 1), ProlepticDate(-430, 9, 22), ProlepticDate(0, 12, 31)]
    assert sorted(dates) == [ProlepticDate(-430, 9, 22), ProlepticDate(0, 12, 31), ProlepticDate(1, 1, 1)]
    assert ProlepticDate(0, 12, 31) < date(1, 1, 1)
    assert date(1, 1, 2) > ProlepticDate(1, 1, 1)


def test_immutable() -> None:
    value = ProlepticDate(2012, 9, 22)
    with pytest.raises(AttributeError):
        value.year = 2013  # type: ignore[misc]


def test_usable_as_dict_key() -> None:
    lookup = {ProlepticDate(-430, 9, 22): "battle"}
    assert lookup[ProlepticDate(-430, 9, 22)] == "battle"
