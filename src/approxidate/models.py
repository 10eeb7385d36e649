"""Core data structures for date interpretation.

This module defines the value types shared by every stage of the engine:
- CalendarMoment: a civil date/time whose fields are filled incrementally
- DateOrder: field orderings for ambiguous numeric date triples
- FormatMode: textual encodings understood by the formatter
- ParseState / TokenMatch: bookkeeping for the token classifiers

Each CalendarMoment field is optional. ``None`` means "not seen yet", which
is distinct from every valid value (including 0 for hour/minute/second).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

YEAR_MIN = 1583  # Gregorian calendar was introduced in October 1582
YEAR_MAX = 2999

TIMESTAMP_MAX = 2**63 - 1
"""Largest signed timestamp; also the clamp value for oversized literals."""

UNSIGNED_MAX = 2**64 - 1

DISAMBIGUATION_WINDOW_DAYS = 10

SECONDS_PER_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DateOrder(Enum):
    """Field order chosen for an unlabeled numeric date triple."""

    YEAR_MONTH_DAY = "yyyy-mm-dd"
    YEAR_DAY_MONTH = "yyyy-dd-mm"
    DAY_MONTH_YEAR = "dd-mm-yyyy"
    MONTH_DAY_YEAR = "mm-dd-yyyy"


class FormatMode(str, Enum):
    """Textual encodings supported by the formatter."""

    RAW = "raw"
    """``<timestamp> +HHMM``"""

    RELATIVE = "relative"
    """Humanized age such as ``3 days ago``."""

    SHORT = "short"
    """``YYYY-MM-DD``"""

    ISO8601 = "iso8601"
    """``YYYY-MM-DD HH:MM:SS +HHMM``"""

    ISO8601_STRICT = "iso8601-strict"
    """``YYYY-MM-DDTHH:MM:SS+HH:MM``"""

    RFC2822 = "rfc2822"
    """``Wkd, D Mon YYYY HH:MM:SS +HHMM``"""

    DEFAULT = "default"
    """``Wkd Mon D HH:MM:SS YYYY +HHMM``"""

    LOCAL = "local"
    """Default layout at the local offset, without the offset suffix."""


# ---------------------------------------------------------------------------
# Calendar moment
# ---------------------------------------------------------------------------


@dataclass
class CalendarMoment:
    """A civil date/time broken into fields, independent of any time zone.

    Fields are filled by the token classifiers and the relative resolver and
    consumed once by the epoch converter. ``weekday`` counts from Sunday=0.
    ``is_dst`` is ``None`` when daylight-saving state is unknown.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    weekday: Optional[int] = None
    is_dst: Optional[bool] = None

    def has_date(self) -> bool:
        """Whether year, month and day are all known."""
        return self.year is not None and self.month is not None and self.day is not None

    def has_time(self) -> bool:
        return self.hour is not None and self.minute is not None and self.second is not None

    def is_empty(self) -> bool:
        """True when no date or time-of-day field has been filled in yet."""
        return all(
            value is None
            for value in (self.year, self.month, self.day, self.hour, self.minute, self.second)
        )

    def with_time_defaults(self) -> "CalendarMoment":
        """Copy with unset hour/minute/second replaced by 0."""
        return replace(
            self,
            hour=self.hour if self.hour is not None else 0,
            minute=self.minute if self.minute is not None else 0,
            second=self.second if self.second is not None else 0,
        )

    def copy(self) -> "CalendarMoment":
        return replace(self)

    def assign(self, other: "CalendarMoment") -> None:
        """Overwrite every field in place with the values of ``other``."""
        self.year = other.year
        self.month = other.month
        self.day = other.day
        self.hour = other.hour
        self.minute = other.minute
        self.second = other.second
        self.weekday = other.weekday
        self.is_dst = other.is_dst

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "weekday": self.weekday,
            "is_dst": self.is_dst,
        }


# ---------------------------------------------------------------------------
# Classifier bookkeeping
# ---------------------------------------------------------------------------


@dataclass
class ParseState:
    """Mutable state shared by the classifiers during one structured parse.

    ``offset`` is in minutes east of UTC and stays ``None`` until a zone token
    is seen. ``absolute`` is set when an epoch-seconds literal was read, in
    which case the moment already describes UTC.
    """

    offset: Optional[int] = None
    absolute: bool = False


@dataclass(frozen=True)
class TokenMatch:
    """A successful classifier match; ``consumed`` characters were used."""

    consumed: int
