"""Token classifiers shared by the structured parser and the relative resolver.

Each classifier looks at ``text[pos:]``, and on success mutates the partial
CalendarMoment (and, for zone tokens, the ParseState) and reports how many
characters it consumed. ``None`` means "not mine", and the caller moves on to
the next classifier in :data:`CLASSIFIERS`.

Numeric heuristics (in precedence order):
- epoch seconds: nine or more significant digits before any other field
- ``A:B[:C]`` time and ``A-B-C`` / ``A/B/C`` / ``A.B.C`` dates
- four digits: HHMM zone if small enough, otherwise a year
- one or two digits: day of month first, then two-digit year, then month
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from approxidate.epoch import days_between, from_timestamp
from approxidate.errors import AmbiguousDateUnresolvedError, InvalidCalendarFieldError
from approxidate.models import (
    DISAMBIGUATION_WINDOW_DAYS,
    TIMESTAMP_MAX,
    YEAR_MAX,
    YEAR_MIN,
    CalendarMoment,
    DateOrder,
    ParseState,
    TokenMatch,
)
from approxidate.tables import MONTH_NAMES, WEEKDAY_NAMES, match_string
from approxidate.timezones import lookup_zone_name, scan_numeric_offset

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[+-]?\d+")

EPOCH_LITERAL_MIN = 100_000_000

DATE_SEPARATORS = "-/."
MULTI_NUMBER_SEPARATORS = ":" + DATE_SEPARATORS


@dataclass(frozen=True)
class ClassifierContext:
    """Inputs the numeric classifiers need beyond the text itself.

    Attributes:
        reference: UTC breakdown of "now", used to pick among ambiguous
            numeric date orders
        window_days: how far into the future of ``reference`` a reading may
            lie and still be accepted
    """

    reference: CalendarMoment
    window_days: int = DISAMBIGUATION_WINDOW_DAYS


Classifier = Callable[[str, int, CalendarMoment, ParseState, ClassifierContext], Optional[TokenMatch]]


# ---------------------------------------------------------------------------
# Number helpers
# ---------------------------------------------------------------------------


def read_number(text: str, pos: int) -> Tuple[int, int]:
    """Parse an optionally signed integer at ``pos``.

    Values beyond the timestamp range are clamped to +/- TIMESTAMP_MAX so an
    absurd literal never wraps around into a plausible one.

    Returns:
        ``(value, end_position)``
    """
    match = _NUMBER.match(text, pos)
    if match is None:
        return 0, pos
    value = int(match.group())
    value = max(-TIMESTAMP_MAX, min(TIMESTAMP_MAX, value))
    return value, match.end()


def could_be_a_year(year: Optional[int]) -> bool:
    if year is None:
        return False
    return YEAR_MIN <= year <= YEAR_MAX or 70 < year <= 99 or 0 <= year < 38


def could_be_a_month(month: Optional[int]) -> bool:
    return month is not None and 0 < month < 13


def could_be_a_day(day: Optional[int]) -> bool:
    return day is not None and 0 < day < 32


def could_be_an_hour(hour: Optional[int]) -> bool:
    return hour is not None and 0 <= hour <= 24


def could_be_a_minute(minute: Optional[int]) -> bool:
    return minute is not None and 0 <= minute < 60


def could_be_a_second(second: Optional[int]) -> bool:
    return second is not None and 0 <= second <= 60


def normalized_year(year: int) -> int:
    """Expand two-digit years: 71-99 are 19xx, 0-37 are 20xx."""
    if 70 < year <= 99:
        return year + 1900
    if 0 <= year < 38:
        return year + 2000
    return year


def fill_date(moment: CalendarMoment, year: int, month: int, day: int) -> None:
    moment.year = normalized_year(year)
    moment.month = month
    moment.day = day


def _ordered_fields(n1: int, n2: int, n3: Optional[int], order: DateOrder) -> Tuple[int, int, int]:
    """Map a numeric triple to ``(year, month, day)`` for a given order."""
    if order is DateOrder.YEAR_MONTH_DAY:
        return n1, n2, n3
    if order is DateOrder.YEAR_DAY_MONTH:
        return n1, n3, n2
    if order is DateOrder.DAY_MONTH_YEAR:
        return n3, n2, n1
    return n3, n1, n2


# ---------------------------------------------------------------------------
# Date order resolution
# ---------------------------------------------------------------------------


def resolve_date_order(
    n1: int,
    n2: int,
    n3: Optional[int],
    separator: str,
    reference: CalendarMoment,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> DateOrder:
    """Choose a field order for an unlabeled numeric date.

    Year-first readings win when the first number is large. Otherwise
    month-day-year and day-month-year readings are tried in turn, and the
    first one that does not lie more than ``window_days`` after ``reference``
    is taken. Dot-separated dates are European, so day-month-year is tried
    before month-day-year for them.

    Raises:
        AmbiguousDateUnresolvedError: no reading is plausible.
    """
    if n1 > 70:
        if could_be_a_month(n2) and could_be_a_day(n3):
            return DateOrder.YEAR_MONTH_DAY
        if could_be_a_day(n2) and could_be_a_month(n3):
            return DateOrder.YEAR_DAY_MONTH

    if separator != ".":
        candidates = (DateOrder.MONTH_DAY_YEAR, DateOrder.DAY_MONTH_YEAR)
    else:
        candidates = (DateOrder.DAY_MONTH_YEAR, DateOrder.MONTH_DAY_YEAR)

    for order in candidates:
        year, month, day = _ordered_fields(n1, n2, n3, order)
        if not (could_be_a_month(month) and could_be_a_day(day) and could_be_a_year(year)):
            continue
        candidate = CalendarMoment()
        fill_date(candidate, year, month, day)
        try:
            if days_between(reference, candidate) <= window_days:
                return order
        except InvalidCalendarFieldError as exc:
            logger.debug(f"Rejected {order.value} reading of {n1}{separator}{n2}{separator}{n3}: {exc}")

    raise AmbiguousDateUnresolvedError(
        f"No plausible field order for {n1}{separator}{n2}{separator}{n3}",
        details={"numbers": [n1, n2, n3], "separator": separator},
    )


# ---------------------------------------------------------------------------
# Multi-field numbers
# ---------------------------------------------------------------------------


def match_multi_number(
    text: str,
    pos: int,
    first: int,
    separator_pos: int,
    moment: CalendarMoment,
    context: ClassifierContext,
) -> Optional[int]:
    """Parse ``A<sep>B[<sep>C]`` starting at ``pos``.

    ``first`` is the already-read value of ``A`` and ``separator_pos`` the
    index of the separator after it, which must be followed by a digit.

    Returns:
        Characters consumed from ``pos``, or ``None`` if the numbers are not a
        valid time or date (the caller then treats ``A`` on its own).
    """
    separator = text[separator_pos]
    second, end = read_number(text, separator_pos + 1)
    third: Optional[int] = None
    if end + 1 < len(text) and text[end] == separator and text[end + 1].isdigit():
        third, end = read_number(text, end + 1)

    if separator == ":":
        if third is None:
            third = 0
        if could_be_an_hour(first) and could_be_a_minute(second) and could_be_a_second(third):
            moment.hour = first
            moment.minute = second
            moment.second = third
            return end - pos
        return None

    try:
        order = resolve_date_order(first, second, third, separator, context.reference, context.window_days)
    except AmbiguousDateUnresolvedError as exc:
        logger.debug(f"Falling back to single numbers: {exc}")
        return None

    fill_date(moment, *_ordered_fields(first, second, third, order))
    return end - pos


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------


def match_alpha(
    text: str,
    pos: int,
    moment: CalendarMoment,
    state: ParseState,
    context: ClassifierContext,
) -> Optional[TokenMatch]:
    """Month name, weekday name, zone abbreviation or AM/PM."""
    if not text[pos].isalpha():
        return None

    for index, name in enumerate(MONTH_NAMES):
        matched = match_string(text, pos, name)
        if matched >= 3:
            moment.month = index + 1
            return TokenMatch(matched)

    for index, name in enumerate(WEEKDAY_NAMES):
        matched = match_string(text, pos, name)
        if matched >= 3:
            moment.weekday = index
            return TokenMatch(matched)

    zone = lookup_zone_name(text, pos)
    if zone is not None:
        offset, matched = zone
        # An explicit numeric offset seen earlier takes precedence.
        if state.offset is None:
            state.offset = offset
        return TokenMatch(matched)

    if match_string(text, pos, "PM") == 2:
        if moment.hour is not None:
            moment.hour = moment.hour % 12 + 12
        return TokenMatch(2)

    if match_string(text, pos, "AM") == 2:
        if moment.hour is not None:
            moment.hour = moment.hour % 12
        return TokenMatch(2)

    return None


def match_numeric_timezone(
    text: str,
    pos: int,
    moment: CalendarMoment,
    state: ParseState,
    context: ClassifierContext,
) -> Optional[TokenMatch]:
    """``+HH``, ``+HHMM`` or ``+HH:MM``; impossible values are not zones."""
    scanned = scan_numeric_offset(text, pos)
    if scanned is None:
        return None
    state.offset, consumed = scanned
    return TokenMatch(consumed)


def match_digit(
    text: str,
    pos: int,
    moment: CalendarMoment,
    state: ParseState,
    context: ClassifierContext,
) -> Optional[TokenMatch]:
    """Epoch seconds, time, date, year, HHMM zone, day, month."""
    if not text[pos].isdigit():
        if text[pos] not in "+-" or pos + 1 >= len(text) or not text[pos + 1].isdigit():
            return None

    number, end = read_number(text, pos)

    # Nine or more digits: seconds since the epoch. Eight digits are left
    # alone so that 20070606 is not mistaken for a timestamp.
    if abs(number) >= EPOCH_LITERAL_MIN and moment.is_empty():
        moment.assign(from_timestamp(number))
        state.absolute = True
        return TokenMatch(end - pos)

    # A signed number can only have been an epoch value.
    if text[pos] in "+-":
        return None

    if end + 1 < len(text) and text[end] in MULTI_NUMBER_SEPARATORS and text[end + 1].isdigit():
        consumed = match_multi_number(text, pos, number, end, moment, context)
        if consumed:
            return TokenMatch(consumed)

    width = end - pos

    if width == 4:
        if number <= 1400 and state.offset is None:
            hours, minutes = divmod(number, 100)
            state.offset = hours * 60 + minutes
        elif 1900 < number < 2100:
            moment.year = number
        return TokenMatch(width)

    # Days and months have at most two digits; longer runs are noise.
    if width > 2:
        return TokenMatch(width)

    # Day of month wins over month or year, so "01 Apr 05" is April 1st, 2005.
    if 0 < number < 32 and moment.day is None:
        moment.day = number
        return TokenMatch(width)

    if width == 2 and moment.year is None:
        if number < 10 and moment.day is not None:
            moment.year = number + 2000
            return TokenMatch(width)
        if number >= 70:
            moment.year = number + 1900
            return TokenMatch(width)

    if 0 < number < 13 and moment.month is None:
        moment.month = number

    return TokenMatch(width)


CLASSIFIERS: Tuple[Classifier, ...] = (match_alpha, match_numeric_timezone, match_digit)
"""Tried in order at every position; the first match wins."""
