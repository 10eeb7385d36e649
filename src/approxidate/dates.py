"""High-level date entry points.

These combine the structured parser and the relative resolver the way most
callers want them: try to read a real date first, and fall back to a
relative phrase ("2 weeks ago") only when that fails.
"""

from __future__ import annotations

import logging
from typing import Optional

from approxidate.environment import Environment
from approxidate.errors import DateParseError
from approxidate.models import DISAMBIGUATION_WINDOW_DAYS, TIMESTAMP_MAX, UNSIGNED_MAX
from approxidate.parser import parse_absolute
from approxidate.relative import approxidate_string, resolve_relative
from approxidate.timezones import decode_numeric_offset, format_offset, local_offset_at

logger = logging.getLogger(__name__)

EXPIRE_NOTHING = ("never", "false")
EXPIRE_EVERYTHING = ("all", "now")


def parse_relative(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> int:
    """Parse an absolute date or, failing that, a relative phrase.

    Raises:
        DateParseError: from the relative resolver when both readings fail.
    """
    environment = environment or Environment()
    if reference_now is None:
        reference_now = environment.now()

    try:
        timestamp, _ = parse_absolute(
            text, reference_now, environment=environment, window_days=window_days
        )
        return timestamp
    except DateParseError as exc:
        logger.debug(f"Not an absolute date, trying relative phrase: {exc}")

    return resolve_relative(text, reference_now, environment=environment, window_days=window_days)


def approxidate(
    text: str,
    reference_now: Optional[int] = None,
    *,
    environment: Optional[Environment] = None,
    window_days: int = DISAMBIGUATION_WINDOW_DAYS,
) -> int:
    """Like :func:`parse_relative`, but unrecognized text means "now"."""
    environment = environment or Environment()
    if reference_now is None:
        reference_now = environment.now()

    try:
        timestamp, _ = parse_absolute(
            text, reference_now, environment=environment, window_days=window_days
        )
        return timestamp
    except DateParseError as exc:
        logger.debug(f"Not an absolute date, trying relative phrase: {exc}")

    timestamp, touched = approxidate_string(
        text, reference_now, environment=environment, window_days=window_days
    )
    if not touched:
        logger.debug(f"Nothing recognized in {text!r}, using the reference instant")
    return timestamp


def parse_expiry(text: str, *, environment: Optional[Environment] = None) -> int:
    """Parse an expiry cut-off such as ``2.weeks.ago``.

    ``never`` and ``false`` expire nothing (timestamp 0). ``all`` and ``now``
    expire everything, so they map to the largest timestamp rather than to
    the current instant.
    """
    if text in EXPIRE_NOTHING:
        return 0
    if text in EXPIRE_EVERYTHING:
        return TIMESTAMP_MAX
    return parse_relative(text, environment=environment)


def datestamp(environment: Optional[Environment] = None) -> str:
    """Current instant as ``"<timestamp> +HHMM"`` at the local offset."""
    environment = environment or Environment()
    now = environment.now()
    offset = decode_numeric_offset(local_offset_at(now, environment))
    return f"{now} {format_offset(offset)}"


def timestamp_overflows(candidate: int) -> bool:
    """Whether an unsigned value cannot be used as a signed 64-bit timestamp.

    The all-ones unsigned value is the overflow marker of unsigned parsing and
    always overflows; anything above the signed maximum would change sign
    when narrowed.
    """
    if candidate < 0 or candidate >= UNSIGNED_MAX:
        return True
    return candidate > TIMESTAMP_MAX
