"""Relative phrase resolver.

Interprets free text such as "3 weeks ago", "last tuesday", "yesterday noon"
or "Dec 6" against a reference instant. Unlike the structured parser, the
walk starts from "now" in local time and every recognized token shifts or
overrides part of that moment.

A bare number is held as the *pending magnitude* until the next word tells
what it counts ("3 days"). If nothing claims it, it is flushed into the
day, month or year field, in that order.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from approxidate.environment import Environment
from approxidate.epoch import from_timestamp
from approxidate.errors import NoRecognizableTokenError
from approxidate.models import (
    DISAMBIGUATION_WINDOW_DAYS,
    SECONDS_PER_DAY,
    YEAR_MAX,
    YEAR_MIN,
    CalendarMoment,
)
from approxidate.tables import (
    MONTH_NAMES,
    NUMBER_NAMES,
    RELATIVE_UNITS,
    SPECIAL_KEYWORDS,
    WEEKDAY_NAMES,
    SpecialKeyword,
    match_string,
)
from approxidate.tokens import ClassifierContext, match_multi_number, read_number

logger = logging.getLogger(__name__)

_KEYWORD_HOURS = {
    SpecialKeyword.MIDNIGHT: 0,
    SpecialKeyword.NOON: 12,
    SpecialKeyword.TEA: 17,
}


# ---------------------------------------------------------------------------
# Moment updates
# ---------------------------------------------------------------------------


def update_moment(moment: CalendarMoment, now: CalendarMoment, shift: int, environment: Environment) -> int:
    """Complete ``moment`` from ``now``, move it ``shift`` seconds back.

    Unset day and month are taken from ``now``. An unset year is taken from
    ``now`` as well, minus one when the month lies after the current month
    (so "Dec 6" read in March means last December). The moment is then
    normalized through local time and replaced by the breakdown of the
    shifted instant.

    Returns:
        The shifted instant.
    """
    if moment.day is None:
        moment.day = now.day
    if moment.month is None:
        moment.month = now.month
    if moment.year is None:
        moment.year = now.year
        if moment.month > now.month:
            moment.year -= 1

    instant = environment.local_timestamp(moment) - shift
    moment.assign(environment.local_fields(instant))
    return instant


def apply_special(
    tag: SpecialKeyword,
    moment: CalendarMoment,
    now: CalendarMoment,
    pending: int,
    environment: Environment,
) -> int:
    """Apply a special keyword to ``moment``.

    Returns:
        The pending magnitude after the keyword; AM/PM consume it as the hour.
    """
    if tag is SpecialKeyword.NOW:
        update_moment(moment, now, 0, environment)
    elif tag is SpecialKeyword.YESTERDAY:
        update_moment(moment, now, SECONDS_PER_DAY, environment)
    elif tag in _KEYWORD_HOURS:
        hour = _KEYWORD_HOURS[tag]
        if moment.hour < hour:
            update_moment(moment, now, SECONDS_PER_DAY, environment)
        moment.hour = hour
        moment.minute = 0
        moment.second = 0
    elif tag in (SpecialKeyword.PM, SpecialKeyword.AM):
        hour = moment.hour
        if pending:
            hour = pending
            moment.minute = 0
            moment.second = 0
        moment.hour = hour % 12 + (12 if tag is SpecialKeyword.PM else 0)
        return 0
    elif tag is SpecialKeyword.NEVER:
        moment.assign(environment.local_fields(0))
    return pending


def flush_pending(moment: CalendarMoment, pending: int) -> None:
    """Treat a leftover bare number as day, then month, then year."""
    if not pending:
        return
    if moment.day is None and pending < 32:
        moment.day = pending
    elif moment.month is None and pending < 13:
        moment.month = pending
    elif moment.year is None:
        if YEAR_MIN < pending < YEAR_MAX:
            moment.year = pending
        elif 69 < pending < 100:
            moment.year = pending + 1900
        elif pending < 38:
            moment.year = pending + 2000


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class RelativeResolver:
    """One left-to-right walk over a relative phrase.

    Attributes:
        now: Local breakdown of the reference instant
        moment: Working moment; starts as ``now`` with the date unset
        pending: Pending magnitude, 0 when there is none
        touched: Whether any token was recognized
    """

    def __init__(
        self,
        reference_now: int,
        environment: Environment,
        window_days: int = DISAMBIGUATION_WINDOW_DAYS,
    ):
        self.environment = environment
        self.now = environment.local_fields(reference_now)
        self.moment = self.now.copy()
        self.moment.year = None
        self.moment.month = None
        self.moment.day = None
        self.pending = 0
        self.touched = False
        self._context = ClassifierContext(reference=from_timestamp(reference_now), window_days=window_days)

    def resolve(self, text: str) -> Tuple[int, bool]:
        pos = 0
        while pos < len(text):
            char = text[pos]
            if char.isdigit():
                flush_pending(self.moment, self.pending)
                self.pending = 0
                pos = self._digit(text, pos)
                self.touched = True
            elif char.isalpha():
                pos = self._alpha(text, pos)
            else:
                pos += 1

        flush_pending(self.moment, self.pending)
        self.pending = 0
        return self._update(0), self.touched

    def _update(self, shift: int) -> int:
        return update_moment(self.moment, self.now, shift, self.environment)

    def _digit(self, text: str, pos: int) -> int:
        number, end = read_number(text, pos)

        if end + 1 < len(text) and text[end] in ":./-" and text[end + 1].isdigit():
            consumed = match_multi_number(text, pos, number, end, self.moment, self._context)
            if consumed:
                return pos + consumed

        # Zero padding is only accepted for small numbers ("Dec 02", not "Dec 0002").
        if text[pos] != "0" or end - pos <= 2:
            self.pending = number
        return end

    def _alpha(self, text: str, pos: int) -> int:
        end = pos + 1
        while end < len(text) and text[end].isalpha():
            end += 1

        if self._match_word(text, pos):
            self.touched = True
        return end

    def _match_word(self, text: str, pos: int) -> bool:
        """Apply the word at ``pos``; True when it was recognized."""
        for index, name in enumerate(MONTH_NAMES):
            if match_string(text, pos, name) >= 3:
                self.moment.month = index + 1
                return True

        for name, tag in SPECIAL_KEYWORDS:
            if match_string(text, pos, name) == len(name):
                self.pending = apply_special(tag, self.moment, self.now, self.pending, self.environment)
                return True

        if not self.pending:
            for value, name in enumerate(NUMBER_NAMES):
                if value and match_string(text, pos, name) == len(name):
                    self.pending = value
                    return True
            if match_string(text, pos, "last") == 4:
                self.pending = 1
                return True
            return False

        for name, seconds in RELATIVE_UNITS:
            if match_string(text, pos, name) >= len(name) - 1:
                self._update(seconds * self.pending)
                self.pending = 0
                return True

        for index, name in enumerate(WEEKDAY_NAMES):
            if match_string(text, pos, name) >= 3:
                weeks = self.pending - 1
                self.pending = 0
                diff = self.moment.weekday - index
                if diff <= 0:
                    weeks += 1
                diff += 7 * weeks
                self._update(diff * SECONDS_PER_DAY)
                return True

        if match_string(text, pos, "months") >= 5:
            self._update(0)
            carry, month_index = divmod(self.moment.month - 1 - self.pending, 12)
            self.moment.year += carry
            self.moment.month = month_index + 1
            self.pending = 0
            return True

        if match_string(text, pos, "years") >= 4:
            self._update(0)
            self.moment.year -= self.pending
            self.pending = 0
            return True

        logger.debug(f"Ignoring unknown word at {pos} in {text!r}")
        return False


def approxidate_string(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> Tuple[int, bool]:
    """Resolve a relative phrase without failing on unknown text.

    Returns:
        ``(timestamp, touched)``; ``touched`` is False when no token was
        recognized, in which case the timestamp is the reference instant.
    """
    environment = environment or Environment()
    if reference_now is None:
        reference_now = environment.now()
    resolver = RelativeResolver(reference_now, environment, window_days)
    return resolver.resolve(text)


def resolve_relative(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> int:
    """Resolve a relative phrase such as "2 weeks ago" to a timestamp.

    Raises:
        NoRecognizableTokenError: nothing in ``text`` was understood.
    """
    timestamp, touched = approxidate_string(
        text, reference_now, environment=environment, window_days=window_days
    )
    if not touched:
        raise NoRecognizableTokenError(
            f"No date or relative time recognized in {text!r}", details={"text": text}
        )
    return timestamp
