"""Structured date parser.

Drives the token classifiers over a date string such as an RFC 2822 mail
header date, an ISO-like timestamp or ``@<seconds> <offset>`` and turns the
collected fields into a ``(timestamp, offset)`` pair.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from approxidate.environment import Environment
from approxidate.epoch import from_timestamp, to_timestamp
from approxidate.models import (
    DISAMBIGUATION_WINDOW_DAYS,
    TIMESTAMP_MAX,
    CalendarMoment,
    ParseState,
)
from approxidate.timezones import format_offset
from approxidate.tokens import CLASSIFIERS, ClassifierContext

logger = logging.getLogger(__name__)

# "@1234567890 +0100", the form stored in object headers.
_OBJECT_HEADER_DATE = re.compile(r"@([+-]?\d+) ([+-])(\d{4})(?:\n|\Z)")


def parse_object_header_date(text: str) -> Optional[Tuple[int, int]]:
    """Fast path for ``@<seconds> <sign>HHMM``.

    Returns:
        ``(timestamp, offset_minutes)`` or ``None`` when the text does not
        have exactly that shape or the seconds value is absurdly large.
    """
    match = _OBJECT_HEADER_DATE.match(text)
    if match is None:
        return None

    stamp = int(match.group(1))
    if abs(stamp) >= TIMESTAMP_MAX:
        return None

    hhmm = int(match.group(3))
    offset = (hhmm // 100) * 60 + hhmm % 100
    if match.group(2) == "-":
        offset = -offset
    return stamp, offset


def scan_tokens(text: str, moment: CalendarMoment, state: ParseState, context: ClassifierContext) -> None:
    """Feed ``text`` to the classifiers until the end or a line break."""
    pos = 0
    while pos < len(text) and text[pos] != "\n":
        for classifier in CLASSIFIERS:
            match = classifier(text, pos, moment, state, context)
            if match is not None:
                pos += match.consumed
                break
        else:
            pos += 1


def parse_absolute(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> Tuple[int, int]:
    """Parse a self-contained date string.

    Args:
        text: Date text, only the first line is read
        reference_now: Instant used to disambiguate numeric dates such as
            ``01/02/03``; defaults to the environment's current instant
        environment: Supplies the clock and local time for zone-less input
        window_days: How far in the future an ambiguous reading may lie

    Returns:
        ``(timestamp, offset_minutes)``

    Raises:
        InvalidCalendarFieldError: no complete, valid date was found.
    """
    environment = environment or Environment()

    header_date = parse_object_header_date(text)
    if header_date is not None:
        return header_date

    if reference_now is None:
        reference_now = environment.now()

    moment = CalendarMoment()
    state = ParseState()
    context = ClassifierContext(reference=from_timestamp(reference_now), window_days=window_days)
    scan_tokens(text, moment, state, context)

    timestamp = to_timestamp(moment)

    offset = state.offset
    if offset is None:
        # No zone in the text: the fields were local civil time.
        local_moment = moment.with_time_defaults()
        local_moment.is_dst = None
        local = environment.local_timestamp(local_moment)
        difference = timestamp - local
        offset = abs(difference) // 60
        if difference < 0:
            offset = -offset
        logger.debug(f"Inferred local offset {format_offset(offset)} for {text!r}")

    if not state.absolute:
        timestamp -= offset * 60

    return timestamp, offset


def parse_date(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> str:
    """Normalize a date string to ``"<timestamp> +HHMM"``."""
    timestamp, offset = parse_absolute(
        text, reference_now, environment=environment, window_days=window_days
    )
    return f"{timestamp} {format_offset(offset)}"


class DateParser:
    """Parses dates against one environment and disambiguation window.

    Example:
        >>> parser = DateParser(Environment.fixed(1700000000))
        >>> parser.parse_date("Thu, 7 Apr 2005 22:13:13 +0200")
        '1112904793 +0200'
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        window_days: int = DISAMBIGUATION_WINDOW_DAYS,
    ):
        self.environment = environment or Environment()
        self.window_days = window_days

    @classmethod
    def from_settings(cls, settings) -> "DateParser":
        return cls(
            environment=Environment.from_settings(settings),
            window_days=settings.dates.disambiguation_window_days,
        )

    def parse_absolute(self, text: str, reference_now: Optional[int] = None) -> Tuple[int, int]:
        return parse_absolute(
            text, reference_now, environment=self.environment, window_days=self.window_days
        )

    def parse_date(self, text: str, reference_now: Optional[int] = None) -> str:
        return parse_date(
            text, reference_now, environment=self.environment, window_days=self.window_days
        )
