"""Tests for timestamp formatting."""

from __future__ import annotations

from typing import List, Tuple

import pytest

from approxidate.errors import UnknownFormatNameError
from approxidate.formatter import (
    DateFormatter,
    decode_format_name,
    english_pluralize,
    format_date,
    show_date_relative,
)
from approxidate.models import FormatMode

STAMP = 1112904793  # 2005-04-07 20:13:13 UTC
NOW = 1_700_000_000
DAY = 86400


@pytest.mark.parametrize(
    "mode,expected",
    [
        (FormatMode.RAW, "1112904793 +0200"),
        (FormatMode.SHORT, "2005-04-07"),
        (FormatMode.ISO8601, "2005-04-07 22:13:13 +0200"),
        (FormatMode.ISO8601_STRICT, "2005-04-07T22:13:13+02:00"),
        (FormatMode.RFC2822, "Thu, 7 Apr 2005 22:13:13 +0200"),
        (FormatMode.DEFAULT, "Thu Apr 7 22:13:13 2005 +0200"),
    ],
)
def test_fixed_layouts(mode: FormatMode, expected: str) -> None:
    assert format_date(STAMP, 120, mode) == expected


def test_offset_moves_calendar_day() -> None:
    assert format_date(STAMP, 240, FormatMode.RFC2822) == "Fri, 8 Apr 2005 00:13:13 +0400"


def test_negative_half_hour_offset() -> None:
    assert format_date(STAMP, -330, FormatMode.ISO8601_STRICT) == "2005-04-07T14:43:13-05:30"
    assert format_date(STAMP, -330, FormatMode.ISO8601) == "2005-04-07 14:43:13 -0530"


def test_local_mode_uses_environment_offset(minus_five_env) -> None:
    text = format_date(STAMP, 120, FormatMode.LOCAL, environment=minus_five_env)
    assert text == "Thu Apr 7 15:13:13 2005"


def test_out_of_range_falls_back_to_epoch() -> None:
    assert format_date(10**12, 120, FormatMode.DEFAULT) == "Thu Jan 1 00:00:00 1970 +0000"
    assert format_date(10**12, 120, FormatMode.SHORT) == "1970-01-01"


def test_each_call_returns_its_own_string() -> None:
    first = format_date(0, 0, FormatMode.SHORT)
    second = format_date(STAMP, 0, FormatMode.SHORT)
    assert first == "1970-01-01"
    assert second == "2005-04-07"


@pytest.mark.parametrize(
    "age,expected",
    [
        (1, "1 second ago"),
        (89, "89 seconds ago"),
        (91, "2 minutes ago"),
        (2 * 3600, "2 hours ago"),
        (13 * DAY, "13 days ago"),
        (14 * DAY, "2 weeks ago"),
        (100 * DAY, "3 months ago"),
        (365 * DAY, "1 year ago"),
        (400 * DAY, "1 year, 1 month ago"),
        (800 * DAY, "2 years, 2 months ago"),
        (2000 * DAY, "5 years ago"),
    ],
)
def test_relative_buckets(age: int, expected: str) -> None:
    assert show_date_relative(NOW - age, NOW) == expected


def test_relative_future() -> None:
    assert show_date_relative(NOW + 1, NOW) == "in the future"


def test_relative_future_is_localizable() -> None:
    translations = {"in the future": "in der Zukunft"}

    def pluralize(count: int, singular: str, plural: str) -> str:
        template = singular if count == 1 else plural
        return translations.get(template, template).format(n=count)

    assert show_date_relative(NOW + 3600, NOW, pluralize) == "in der Zukunft"


def test_relative_uses_pluralizer() -> None:
    calls: List[Tuple[int, str, str]] = []

    def pluralize(count: int, singular: str, plural: str) -> str:
        calls.append((count, singular, plural))
        return english_pluralize(count, singular, plural).upper()

    assert show_date_relative(NOW - 400 * DAY, NOW, pluralize) == "1 YEAR, 1 MONTH AGO"
    assert calls[0] == (1, "{n} year", "{n} years")
    assert calls[1][0] == 1


def test_relative_mode_reads_environment_clock(utc_env) -> None:
    assert format_date(NOW - 3 * DAY, 0, FormatMode.RELATIVE, environment=utc_env) == "3 days ago"


@pytest.mark.parametrize(
    "name,mode",
    [
        ("relative", FormatMode.RELATIVE),
        ("iso8601", FormatMode.ISO8601),
        ("iso", FormatMode.ISO8601),
        ("iso8601-strict", FormatMode.ISO8601_STRICT),
        ("iso-strict", FormatMode.ISO8601_STRICT),
        ("rfc2822", FormatMode.RFC2822),
        ("rfc", FormatMode.RFC2822),
        ("short", FormatMode.SHORT),
        ("local", FormatMode.LOCAL),
        ("default", FormatMode.DEFAULT),
        ("raw", FormatMode.RAW),
    ],
)
def test_decode_format_name(name: str, mode: FormatMode) -> None:
    assert decode_format_name(name) is mode


@pytest.mark.parametrize("name", ["ISO", "unix", ""])
def test_decode_format_name_rejects_unknown(name: str) -> None:
    with pytest.raises(UnknownFormatNameError) as excinfo:
        decode_format_name(name)
    assert excinfo.value.details["format"] == name


def test_date_formatter(utc_env) -> None:
    formatter = DateFormatter(utc_env, default_mode=FormatMode.SHORT)
    assert formatter.format(STAMP, 0) == "2005-04-07"
    assert formatter.format(STAMP, 0, FormatMode.RAW) == "1112904793 +0000"
    assert formatter.relative(NOW - 120) == "2 minutes ago"
