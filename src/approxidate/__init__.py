"""Approximate date parsing and formatting.

Reads mail-header dates, ISO-like timestamps, ambiguous numeric dates, epoch
seconds and relative phrases ("3 weeks ago", "yesterday noon") into a
``(timestamp, offset)`` pair, and renders timestamps back as text.
"""

from approxidate.dates import (
    approxidate,
    datestamp,
    parse_expiry,
    parse_relative,
    timestamp_overflows,
)
from approxidate.environment import Environment
from approxidate.epoch import days_between, from_timestamp, to_timestamp
from approxidate.errors import (
    AmbiguousDateUnresolvedError,
    ApproxidateError,
    ConfigurationError,
    DateParseError,
    InvalidCalendarFieldError,
    InvalidConfigError,
    MalformedOffsetError,
    NoRecognizableTokenError,
    UnknownFormatNameError,
)
from approxidate.formatter import (
    DateFormatter,
    decode_format_name,
    english_pluralize,
    format_date,
    show_date_relative,
)
from approxidate.models import CalendarMoment, DateOrder, FormatMode
from approxidate.parser import DateParser, parse_absolute, parse_date
from approxidate.relative import resolve_relative
from approxidate.timezones import (
    decode_numeric_offset,
    encode_numeric_offset,
    local_offset_at,
    lookup_zone_name,
    parse_numeric_offset,
)
from approxidate.tokens import resolve_date_order

__version__ = "0.1.0"

__all__ = [
    # Parsing
    "parse_absolute",
    "parse_relative",
    "parse_expiry",
    "parse_date",
    "approxidate",
    "resolve_relative",
    "resolve_date_order",
    "DateParser",
    # Formatting
    "format_date",
    "show_date_relative",
    "decode_format_name",
    "english_pluralize",
    "datestamp",
    "DateFormatter",
    # Calendar and zones
    "to_timestamp",
    "from_timestamp",
    "days_between",
    "timestamp_overflows",
    "decode_numeric_offset",
    "encode_numeric_offset",
    "local_offset_at",
    "lookup_zone_name",
    "parse_numeric_offset",
    # Types
    "Environment",
    "CalendarMoment",
    "DateOrder",
    "FormatMode",
    # Errors
    "ApproxidateError",
    "DateParseError",
    "InvalidCalendarFieldError",
    "AmbiguousDateUnresolvedError",
    "MalformedOffsetError",
    "NoRecognizableTokenError",
    "ConfigurationError",
    "UnknownFormatNameError",
    "InvalidConfigError",
]
