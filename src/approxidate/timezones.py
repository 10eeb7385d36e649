"""Time zone offset resolution.

Two representations of an offset circulate in this package:
- minutes east of UTC (the ``Offset`` carried by parse results), and
- the HHMM-grouped decimal code used in mail headers, where -0530 is the
  integer -530 and means 5 hours 30 minutes west.

Only fixed numeric offsets and the abbreviation table in
:mod:`approxidate.tables` are understood when parsing.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Optional, Tuple

from approxidate.epoch import to_timestamp
from approxidate.errors import InvalidCalendarFieldError, MalformedOffsetError
from approxidate.tables import TIMEZONE_NAMES, match_string

if TYPE_CHECKING:
    from approxidate.environment import Environment

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


def decode_numeric_offset(code: int) -> int:
    """Convert an HHMM-grouped code to minutes: ``-530 -> -330``."""
    magnitude = abs(code)
    minutes = (magnitude // 100) * 60 + magnitude % 100
    return -minutes if code < 0 else minutes


def encode_numeric_offset(minutes: int) -> int:
    """Convert minutes to an HHMM-grouped code: ``-330 -> -530``."""
    magnitude = abs(minutes)
    code = (magnitude % 60) + (magnitude // 60) * 100
    return -code if minutes < 0 else code


def format_offset(minutes: int, colon: bool = False) -> str:
    """Render minutes east of UTC as ``+HHMM`` or ``+HH:MM``."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    separator = ":" if colon else ""
    return f"{sign}{hours:02d}{separator}{mins:02d}"


def lookup_zone_name(text: str, pos: int = 0) -> Optional[Tuple[int, int]]:
    """Match a zone abbreviation at ``text[pos:]``.

    A zone matches on a case-insensitive prefix of at least three characters
    or on its full name (so the single letter "Z" works).

    Returns:
        ``(offset_minutes, matched_length)`` or ``None``.
    """
    for zone in TIMEZONE_NAMES:
        matched = match_string(text, pos, zone.name)
        if matched >= 3 or matched == len(zone.name):
            return zone.offset_minutes, matched
    return None


def scan_numeric_offset(text: str, pos: int = 0) -> Optional[Tuple[int, int]]:
    """Read ``+HH``, ``+HHMM`` or ``+HH:MM`` at ``text[pos:]``.

    Returns:
        ``(offset_minutes, consumed)``, or ``None`` when the text is not a
        numeric zone or names an impossible one (hour >= 24, minute >= 60).
    """
    if pos + 1 >= len(text) or text[pos] not in "+-" or not text[pos + 1].isdigit():
        return None

    digits = _DIGITS.match(text, pos + 1)
    hour = int(digits.group())
    end = digits.end()
    width = end - (pos + 1)
    minute = 0

    if width == 4:
        hour, minute = divmod(hour, 100)
    elif width != 2:
        return None
    elif end < len(text) and text[end] == ":":
        minute_digits = _DIGITS.match(text, end + 1)
        if minute_digits is None or minute_digits.end() - (pos + 1) != 5:
            return None
        minute = int(minute_digits.group())
        end = minute_digits.end()

    if minute >= 60 or hour >= 24:
        return None

    offset = hour * 60 + minute
    if text[pos] == "-":
        offset = -offset
    return offset, end - pos


def parse_numeric_offset(text: str) -> int:
    """Strictly parse a whole string such as ``-05:30`` into minutes.

    Raises:
        MalformedOffsetError: the text is not exactly one valid numeric zone.
    """
    candidate = text.strip()
    scanned = scan_numeric_offset(candidate)
    if scanned is None or scanned[1] != len(candidate):
        raise MalformedOffsetError(f"Malformed offset {text!r}", details={"offset": text})
    return scanned[0]


def local_offset_at(timestamp: int, environment: "Environment") -> int:
    """HHMM-grouped local offset in effect at ``timestamp``.

    The local calendar fields of the instant are read back as if they were
    UTC; the difference to the instant is the offset. Returns 0 when the local
    fields fall outside the supported calendar.
    """
    try:
        local_as_utc = to_timestamp(environment.local_fields(timestamp))
    except InvalidCalendarFieldError as exc:
        logger.debug(f"No local offset for {timestamp}: {exc}")
        return 0

    difference = local_as_utc - timestamp
    minutes = abs(difference) // 60
    return encode_numeric_offset(minutes if difference >= 0 else -minutes)
