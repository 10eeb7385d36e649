"""Calendar <-> epoch conversion.

Pure proleptic-Gregorian arithmetic between a CalendarMoment and a signed
count of seconds since 1970-01-01T00:00:00Z. No time zone is applied here;
callers add or subtract offsets themselves.
"""

from __future__ import annotations

from approxidate.errors import InvalidCalendarFieldError
from approxidate.models import SECONDS_PER_DAY, YEAR_MAX, YEAR_MIN, CalendarMoment


# Days before the first of each month in a non-leap year, indexed by month 1-12.
_DAYS_BEFORE_MONTH = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

_DAYS_IN_MONTH = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def number_of_leap_days(year: int) -> int:
    """Leap days from year 0 up to and including ``year``."""
    return year // 4 - year // 100 + year // 400


def is_leap_year(year: int) -> bool:
    if year % 4:
        return False
    if year % 100:
        return True
    return year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month]


def to_timestamp(moment: CalendarMoment) -> int:
    """Convert a calendar moment to seconds since the epoch.

    Unset hour/minute/second count as 0.

    Raises:
        InvalidCalendarFieldError: year, month or day is unset, the year is
            outside 1583-2999, the month outside 1-12 or the day does not
            exist in that month.
    """
    year, month, day = moment.year, moment.month, moment.day

    missing = [name for name, value in (("year", year), ("month", month), ("day", day)) if value is None]
    if missing:
        raise InvalidCalendarFieldError(
            f"No {', '.join(missing)} found in date", details={"missing": missing}
        )

    if not YEAR_MIN <= year <= YEAR_MAX:
        raise InvalidCalendarFieldError(
            f"Year {year} is outside {YEAR_MIN}-{YEAR_MAX}", details={"year": year}
        )
    if not 1 <= month <= 12:
        raise InvalidCalendarFieldError(f"Month {month} is outside 1-12", details={"month": month})
    if not 1 <= day <= days_in_month(year, month):
        raise InvalidCalendarFieldError(
            f"Day {day} does not exist in {year}-{month:02d}",
            details={"year": year, "month": month, "day": day},
        )

    leap_days_since_epoch = number_of_leap_days(year) - number_of_leap_days(1970)
    days = (year - 1970) * 365 + leap_days_since_epoch + _DAYS_BEFORE_MONTH[month] + (day - 1)
    # The leap-day count above already includes this year's Feb 29.
    if month <= 2 and is_leap_year(year):
        days -= 1

    return (
        days * SECONDS_PER_DAY
        + (moment.hour or 0) * 3600
        + (moment.minute or 0) * 60
        + (moment.second or 0)
    )


def from_timestamp(timestamp: int) -> CalendarMoment:
    """Break seconds since the epoch into UTC calendar fields.

    Inverse of :func:`to_timestamp`; also fills ``weekday``. No range check
    is applied, see :func:`in_supported_range`.
    """
    days, seconds = divmod(timestamp, SECONDS_PER_DAY)

    # Civil-from-days over 400-year eras starting on March 1st.
    z = days + 719468
    era = z // 146097
    day_of_era = z - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)

    hour, remainder = divmod(seconds, 3600)
    minute, second = divmod(remainder, 60)

    return CalendarMoment(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        weekday=(days + 4) % 7,  # 1970-01-01 was a Thursday
        is_dst=False,
    )


def in_supported_range(moment: CalendarMoment) -> bool:
    return moment.year is not None and YEAR_MIN <= moment.year <= YEAR_MAX


def days_between(start: CalendarMoment, end: CalendarMoment) -> int:
    """Whole days from ``start`` to ``end``, truncated toward zero.

    A moment whose time of day is incomplete is taken at midnight. Only used
    for disambiguation heuristics.
    """
    start_seconds = to_timestamp(_midnight_if_incomplete(start))
    end_seconds = to_timestamp(_midnight_if_incomplete(end))
    difference = end_seconds - start_seconds
    days = abs(difference) // SECONDS_PER_DAY
    return days if difference >= 0 else -days


def _midnight_if_incomplete(moment: CalendarMoment) -> CalendarMoment:
    if moment.has_time():
        return moment
    midnight = moment.copy()
    midnight.hour = midnight.minute = midnight.second = 0
    return midnight
