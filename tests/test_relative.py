"""Tests for the relative phrase resolver.

All tests run at Tuesday 2023-11-14 22:13:20 UTC.
"""

from __future__ import annotations

import pytest

from approxidate.errors import NoRecognizableTokenError
from approxidate.models import CalendarMoment
from approxidate.relative import approxidate_string, flush_pending, resolve_relative

NOW = 1_700_000_000
DAY = 86400
MIDNIGHT_TODAY = 1699920000


@pytest.mark.parametrize(
    "text,expected",
    [
        ("now", NOW),
        ("today", NOW),
        ("yesterday", NOW - DAY),
        ("3 days ago", NOW - 3 * DAY),
        ("2 weeks ago", NOW - 14 * DAY),
        ("2.weeks.ago", NOW - 14 * DAY),
        ("five hours ago", NOW - 5 * 3600),
        ("90 seconds ago", NOW - 90),
        ("1 minute ago", NOW - 60),
        ("never", 0),
    ],
)
def test_relative_shifts(utc_env, text: str, expected: int) -> None:
    assert resolve_relative(text, environment=utc_env) == expected


def test_noon_today_when_already_afternoon(utc_env) -> None:
    assert resolve_relative("noon", environment=utc_env) == MIDNIGHT_TODAY + 12 * 3600


def test_midnight_and_tea(utc_env) -> None:
    assert resolve_relative("midnight", environment=utc_env) == MIDNIGHT_TODAY
    assert resolve_relative("tea", environment=utc_env) == MIDNIGHT_TODAY + 17 * 3600


def test_noon_before_noon_means_yesterday(utc_env) -> None:
    morning = MIDNIGHT_TODAY + 9 * 3600
    assert resolve_relative("noon", morning, environment=utc_env) == MIDNIGHT_TODAY - 12 * 3600


def test_yesterday_noon(utc_env) -> None:
    assert resolve_relative("yesterday noon", environment=utc_env) == MIDNIGHT_TODAY - DAY + 12 * 3600


def test_explicit_hour_with_pm(utc_env) -> None:
    assert resolve_relative("5 pm", environment=utc_env) == MIDNIGHT_TODAY + 17 * 3600
    assert resolve_relative("yesterday 9am", environment=utc_env) == MIDNIGHT_TODAY - DAY + 9 * 3600


def test_last_weekday(utc_env) -> None:
    # Friday 2023-11-10 at the current time of day
    assert resolve_relative("last friday", environment=utc_env) == NOW - 4 * DAY


def test_last_same_weekday_is_a_week_back(utc_env) -> None:
    assert resolve_relative("last tuesday", environment=utc_env) == NOW - 7 * DAY


def test_counted_weekdays(utc_env) -> None:
    assert resolve_relative("2 fridays ago", environment=utc_env) == NOW - 11 * DAY


def test_bare_weekday_is_ignored(utc_env) -> None:
    assert resolve_relative("friday now", environment=utc_env) == NOW


def test_months_ago(utc_env) -> None:
    # 2023-08-14 22:13:20
    assert resolve_relative("3 months ago", environment=utc_env) == 1692051200


def test_months_ago_borrows_from_year(utc_env) -> None:
    # 2022-12-14 22:13:20
    assert resolve_relative("11 months ago", environment=utc_env) == 1671056000


def test_years_ago(utc_env) -> None:
    assert resolve_relative("2 years ago", environment=utc_env) == NOW - 730 * DAY


def test_month_and_day_in_the_future_mean_last_year(utc_env) -> None:
    # 2022-12-06 22:13:20
    assert resolve_relative("Dec 6", environment=utc_env) == 1670364800


def test_month_and_day_in_the_past_stay_this_year(utc_env) -> None:
    # 2023-03-01 22:13:20
    assert resolve_relative("March 1", environment=utc_env) == 1677708800


def test_month_day_and_year(utc_env) -> None:
    # 1992-12-06 22:13:20
    assert resolve_relative("Dec 6, 1992", environment=utc_env) == 723680000


def test_zero_padded_large_number_is_ignored(utc_env) -> None:
    assert resolve_relative("Dec 0006", environment=utc_env) == resolve_relative("Dec", environment=utc_env)


def test_relative_in_other_zone(minus_five_env) -> None:
    # Local time is 17:13:20, so "noon" is today at 17:00 UTC.
    assert resolve_relative("noon", environment=minus_five_env) == MIDNIGHT_TODAY + 17 * 3600


def test_unrecognized_text_raises(utc_env) -> None:
    with pytest.raises(NoRecognizableTokenError):
        resolve_relative("the day after the party", environment=utc_env)


def test_approxidate_string_reports_touched(utc_env) -> None:
    assert approxidate_string("gibberish", environment=utc_env) == (NOW, False)
    assert approxidate_string("yesterday", environment=utc_env) == (NOW - DAY, True)


def test_flush_pending_precedence() -> None:
    moment = CalendarMoment()
    flush_pending(moment, 6)
    assert moment.day == 6

    moment = CalendarMoment(day=6)
    flush_pending(moment, 12)
    assert moment.month == 12

    moment = CalendarMoment(day=6, month=12)
    flush_pending(moment, 1992)
    assert moment.year == 1992

    moment = CalendarMoment(day=6, month=12)
    flush_pending(moment, 95)
    assert moment.year == 1995

    moment = CalendarMoment(day=6, month=12)
    flush_pending(moment, 0)
    assert moment.year is None
