"""Tests for calendar <-> epoch conversion."""

from __future__ import annotations

import pytest

from approxidate.epoch import (
    days_between,
    days_in_month,
    from_timestamp,
    in_supported_range,
    is_leap_year,
    to_timestamp,
)
from approxidate.errors import InvalidCalendarFieldError
from approxidate.models import CalendarMoment


def test_epoch_origin_is_zero() -> None:
    assert to_timestamp(CalendarMoment(year=1970, month=1, day=1)) == 0


def test_known_instants() -> None:
    assert to_timestamp(CalendarMoment(year=2000, month=3, day=1)) == 951868800
    moment = CalendarMoment(year=2005, month=4, day=7, hour=22, minute=13, second=13)
    assert to_timestamp(moment) == 1112911993


def test_unset_time_counts_as_midnight() -> None:
    with_time = CalendarMoment(year=2024, month=2, day=29, hour=0, minute=0, second=0)
    without_time = CalendarMoment(year=2024, month=2, day=29)
    assert to_timestamp(with_time) == to_timestamp(without_time)


@pytest.mark.parametrize("year", [2000, 2400, 1600, 2024])
def test_feb_29_in_leap_years(year: int) -> None:
    moment = from_timestamp(to_timestamp(CalendarMoment(year=year, month=2, day=29)))
    assert (moment.year, moment.month, moment.day) == (year, 2, 29)


@pytest.mark.parametrize("year", [1900, 2100, 2001])
def test_feb_29_rejected_in_common_years(year: int) -> None:
    with pytest.raises(InvalidCalendarFieldError):
        to_timestamp(CalendarMoment(year=year, month=2, day=29))


@pytest.mark.parametrize(
    "moment",
    [
        CalendarMoment(year=1582, month=12, day=31),
        CalendarMoment(year=3000, month=1, day=1),
        CalendarMoment(year=2020, month=13, day=1),
        CalendarMoment(year=2020, month=0, day=1),
        CalendarMoment(year=2020, month=4, day=31),
        CalendarMoment(year=2020, month=4),
        CalendarMoment(month=4, day=1),
    ],
)
def test_invalid_fields_raise(moment: CalendarMoment) -> None:
    with pytest.raises(InvalidCalendarFieldError):
        to_timestamp(moment)


def test_missing_fields_are_named() -> None:
    with pytest.raises(InvalidCalendarFieldError) as excinfo:
        to_timestamp(CalendarMoment(month=4, day=7))
    assert str(excinfo.value) == "No year found in date"
    assert excinfo.value.details == {"missing": ["year"]}

    with pytest.raises(InvalidCalendarFieldError) as excinfo:
        to_timestamp(CalendarMoment())
    assert excinfo.value.details == {"missing": ["year", "month", "day"]}


@pytest.mark.parametrize(
    "year,month,day",
    [(1583, 1, 1), (1600, 2, 29), (1969, 12, 31), (2038, 1, 19), (2999, 12, 31)],
)
def test_round_trip_through_breakdown(year: int, month: int, day: int) -> None:
    moment = CalendarMoment(year=year, month=month, day=day, hour=13, minute=14, second=15)
    back = from_timestamp(to_timestamp(moment))
    assert (back.year, back.month, back.day) == (year, month, day)
    assert (back.hour, back.minute, back.second) == (13, 14, 15)


def test_breakdown_fills_weekday() -> None:
    assert from_timestamp(0).weekday == 4  # Thursday
    assert from_timestamp(1_700_000_000).weekday == 2  # Tuesday


def test_breakdown_before_epoch() -> None:
    moment = from_timestamp(-1)
    assert (moment.year, moment.month, moment.day) == (1969, 12, 31)
    assert (moment.hour, moment.minute, moment.second) == (23, 59, 59)
    assert moment.weekday == 3


def test_supported_range() -> None:
    assert in_supported_range(from_timestamp(0))
    assert not in_supported_range(from_timestamp(10**12))


def test_days_between_uses_midnight_for_dates() -> None:
    start = CalendarMoment(year=2003, month=1, day=1)
    assert days_between(start, CalendarMoment(year=2003, month=1, day=11)) == 10


def test_days_between_truncates_toward_zero() -> None:
    reference = CalendarMoment(year=2003, month=1, day=15, hour=12, minute=0, second=0)
    assert days_between(reference, CalendarMoment(year=2003, month=1, day=2)) == -13
    assert days_between(reference, CalendarMoment(year=2003, month=1, day=20)) == 4


def test_leap_year_rules() -> None:
    assert is_leap_year(2000)
    assert not is_leap_year(1900)
    assert is_leap_year(2024)
    assert not is_leap_year(2023)
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2024, 9) == 30
