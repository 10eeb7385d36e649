"""Clock and local-time capability.

The engine never reads the system clock or time zone database directly;
everything goes through an :class:`Environment`. The default environment
uses ``time.time`` and ``dateutil.tz.tzlocal()``. Tests and callers that need
determinism inject a fixed clock and any ``tzinfo``.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from datetime import tzinfo as TZInfo
from typing import TYPE_CHECKING, Callable, Optional

from dateutil import tz

from approxidate.errors import InvalidCalendarFieldError
from approxidate.models import CalendarMoment

if TYPE_CHECKING:
    from approxidate.configuration.settings import Settings

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


class Environment:
    """Answers "what time is it" and "what does local time mean".

    Example:
        >>> env = Environment(tzinfo=tz.tzoffset(None, 3600), clock=lambda: 1700000000)
        >>> env.now()
        1700000000
        >>> env.local_fields(0).hour
        1

    Attributes:
        tzinfo: Zone used for local calendar breakdowns
    """

    def __init__(
        self,
        tzinfo: Optional[TZInfo] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.tzinfo = tzinfo if tzinfo is not None else tz.tzlocal()
        self._clock = clock or time.time

    @classmethod
    def fixed(cls, now: int, tzinfo: Optional[TZInfo] = None) -> "Environment":
        """Environment frozen at ``now``, in UTC unless a zone is given."""
        return cls(tzinfo=tzinfo if tzinfo is not None else tz.UTC, clock=lambda: now)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Environment":
        """Environment for the zone named in settings (local when unset)."""
        zone_name = settings.dates.timezone
        if not zone_name:
            return cls()
        zone = tz.gettz(zone_name)
        if zone is None:
            # Settings validation normally rejects this already.
            logger.warning(f"Unknown time zone {zone_name!r}, using local time")
        return cls(tzinfo=zone)

    def now(self) -> int:
        """Current instant in whole seconds since the epoch."""
        return int(self._clock())

    def local_fields(self, timestamp: int) -> CalendarMoment:
        """Local calendar breakdown of an instant (like ``localtime``).

        Raises:
            InvalidCalendarFieldError: the instant cannot be represented.
        """
        try:
            moment = datetime.fromtimestamp(timestamp, tz=self.tzinfo)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidCalendarFieldError(
                f"Timestamp {timestamp} has no local calendar representation",
                details={"timestamp": timestamp},
            ) from exc

        dst = moment.dst()
        return CalendarMoment(
            year=moment.year,
            month=moment.month,
            day=moment.day,
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
            weekday=moment.isoweekday() % 7,
            is_dst=None if dst is None else bool(dst),
        )

    def local_timestamp(self, moment: CalendarMoment) -> int:
        """Interpret a moment as local civil time (like ``mktime``).

        Out-of-range fields are normalized: day 0 is the last day of the
        previous month, hour 25 is 01:00 the next day and so on. Unset
        time-of-day fields count as 0. When ``is_dst`` is known it picks the
        reading of a wall-clock time that occurs twice.

        Raises:
            InvalidCalendarFieldError: year, month or day is unset, or the
                normalized moment falls outside the representable range.
        """
        if not moment.has_date():
            raise InvalidCalendarFieldError(
                "Local time needs year, month and day", details=moment.to_dict()
            )

        try:
            carry, month_index = divmod(moment.month - 1, 12)
            wall = datetime(moment.year + carry, month_index + 1, 1) + timedelta(
                days=moment.day - 1,
                hours=moment.hour or 0,
                minutes=moment.minute or 0,
                seconds=moment.second or 0,
            )
        except (OverflowError, ValueError) as exc:
            raise InvalidCalendarFieldError(
                f"Moment cannot be represented: {exc}", details=moment.to_dict()
            ) from exc

        local = tz.resolve_imaginary(wall.replace(tzinfo=self.tzinfo))
        if moment.is_dst is not None and tz.datetime_ambiguous(local):
            local = tz.enfold(local, fold=0 if moment.is_dst else 1)

        return (local - _EPOCH) // _ONE_SECOND
