"""Render timestamps as text.

Every call returns a new string. The humanized ``relative`` mode routes all
of its wording through a pluralizer callback so that callers can localize
it; :func:`english_pluralize` is used when none is given.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from approxidate.environment import Environment
from approxidate.epoch import from_timestamp, in_supported_range
from approxidate.errors import UnknownFormatNameError
from approxidate.models import FormatMode
from approxidate.tables import MONTH_NAMES, WEEKDAY_NAMES
from approxidate.timezones import decode_numeric_offset, format_offset, local_offset_at

logger = logging.getLogger(__name__)

Pluralizer = Callable[[int, str, str], str]
"""``pluralize(count, singular_template, plural_template) -> str``; templates use ``{n}``."""


FORMAT_NAMES: Dict[str, FormatMode] = {
    "relative": FormatMode.RELATIVE,
    "iso8601": FormatMode.ISO8601,
    "iso": FormatMode.ISO8601,
    "iso8601-strict": FormatMode.ISO8601_STRICT,
    "iso-strict": FormatMode.ISO8601_STRICT,
    "rfc2822": FormatMode.RFC2822,
    "rfc": FormatMode.RFC2822,
    "short": FormatMode.SHORT,
    "local": FormatMode.LOCAL,
    "default": FormatMode.DEFAULT,
    "raw": FormatMode.RAW,
}


def decode_format_name(name: str) -> FormatMode:
    """Map a format name or alias (``iso``, ``rfc`` ...) to a FormatMode.

    Raises:
        UnknownFormatNameError: the name is not recognized.
    """
    try:
        return FORMAT_NAMES[name]
    except KeyError:
        raise UnknownFormatNameError(
            f"Unknown date format {name!r}",
            details={"format": name, "known": sorted(FORMAT_NAMES)},
        ) from None


def english_pluralize(count: int, singular: str, plural: str) -> str:
    template = singular if count == 1 else plural
    return template.format(n=count)


# ---------------------------------------------------------------------------
# Relative age
# ---------------------------------------------------------------------------


def show_date_relative(timestamp: int, now: int, pluralize: Optional[Pluralizer] = None) -> str:
    """Humanized age of ``timestamp`` as seen from ``now``.

    Each step rounds to the nearest unit before choosing the next bucket:
    seconds below 90, then minutes below 90, hours below 36, days below 14,
    weeks below 70 days, months below a year, "Y years, M months" below five
    years and plain years beyond that.
    """
    pluralize = pluralize or english_pluralize

    if now < timestamp:
        return pluralize(0, "in the future", "in the future")

    diff = now - timestamp
    if diff < 90:
        return pluralize(diff, "{n} second ago", "{n} seconds ago")

    diff = (diff + 30) // 60
    if diff < 90:
        return pluralize(diff, "{n} minute ago", "{n} minutes ago")

    diff = (diff + 30) // 60
    if diff < 36:
        return pluralize(diff, "{n} hour ago", "{n} hours ago")

    # Days from here on.
    diff = (diff + 12) // 24
    if diff < 14:
        return pluralize(diff, "{n} day ago", "{n} days ago")

    if diff < 70:
        weeks = (diff + 3) // 7
        return pluralize(weeks, "{n} week ago", "{n} weeks ago")

    if diff < 365:
        months = (diff + 15) // 30
        return pluralize(months, "{n} month ago", "{n} months ago")

    if diff < 1825:
        total_months = (diff * 12 * 2 + 365) // (365 * 2)
        years, months = divmod(total_months, 12)
        if months:
            year_text = pluralize(years, "{n} year", "{n} years")
            return pluralize(months, f"{year_text}, {{n}} month ago", f"{year_text}, {{n}} months ago")
        return pluralize(years, "{n} year ago", "{n} years ago")

    years = (diff + 183) // 365
    return pluralize(years, "{n} year ago", "{n} years ago")


# ---------------------------------------------------------------------------
# Fixed layouts
# ---------------------------------------------------------------------------


def format_date(
    timestamp: int,
    offset: int,
    mode: FormatMode = FormatMode.DEFAULT,
    *,
    environment: Optional[Environment] = None,
    pluralize: Optional[Pluralizer] = None,
) -> str:
    """Format ``timestamp`` as seen at ``offset`` minutes east of UTC.

    Example:
        >>> format_date(1112911993, 120, FormatMode.RFC2822)
        'Fri, 8 Apr 2005 00:13:13 +0200'
    """
    if mode is FormatMode.RAW:
        return f"{timestamp} {format_offset(offset)}"

    if mode is FormatMode.RELATIVE:
        environment = environment or Environment()
        return show_date_relative(timestamp, environment.now(), pluralize)

    if mode is FormatMode.LOCAL:
        environment = environment or Environment()
        offset = decode_numeric_offset(local_offset_at(timestamp, environment))

    fields = from_timestamp(timestamp + offset * 60)
    if not in_supported_range(fields):
        logger.debug(f"Timestamp {timestamp} outside the supported calendar, showing the epoch")
        fields = from_timestamp(0)
        offset = 0

    weekday = WEEKDAY_NAMES[fields.weekday][:3]
    month = MONTH_NAMES[fields.month - 1][:3]
    date = f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}"
    time_of_day = f"{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}"

    if mode is FormatMode.SHORT:
        return date
    if mode is FormatMode.ISO8601:
        return f"{date} {time_of_day} {format_offset(offset)}"
    if mode is FormatMode.ISO8601_STRICT:
        return f"{date}T{time_of_day}{format_offset(offset, colon=True)}"
    if mode is FormatMode.RFC2822:
        return f"{weekday}, {fields.day} {month} {fields.year} {time_of_day} {format_offset(offset)}"

    text = f"{weekday} {month} {fields.day} {time_of_day} {fields.year}"
    if mode is FormatMode.LOCAL:
        return text
    return f"{text} {format_offset(offset)}"


class DateFormatter:
    """Formats timestamps with a bound environment and pluralizer."""

    def __init__(
        self,
        environment: Optional[Environment] = None,
        pluralize: Optional[Pluralizer] = None,
        default_mode: FormatMode = FormatMode.DEFAULT,
    ):
        self.environment = environment or Environment()
        self.pluralize = pluralize or english_pluralize
        self.default_mode = default_mode

    def format(self, timestamp: int, offset: int, mode: Optional[FormatMode] = None) -> str:
        return format_date(
            timestamp,
            offset,
            mode or self.default_mode,
            environment=self.environment,
            pluralize=self.pluralize,
        )

    def relative(self, timestamp: int) -> str:
        return show_date_relative(timestamp, self.environment.now(), self.pluralize)
