# chronolens/core/ttl.py
"""
TTL policy tied to calendar boundaries.

- "today" entries live until the next midnight.
- "week" entries live until the next Sunday midnight. A request made on Sunday
  is cached until the following Sunday, never for zero seconds.

All boundaries are computed in a single reference zone (UTC unless
configured otherwise). Differences are taken in UTC so a DST change in the
reference zone is measured in real elapsed seconds.
"""
import logging
import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chronolens.core.models import ExpirationInfo, ViewType

logger = logging.getLogger(__name__)

# date.weekday(): Monday == 0 ... Sunday == 6
WEEK_BOUNDARY_WEEKDAY = 6

EXPIRY_DESCRIPTIONS = {
    ViewType.TODAY: "midnight",
    ViewType.WEEK: "end of week (Sunday)",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Turn an IANA zone name into a tzinfo, falling back to UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown cache timezone '{name}', using UTC.")
        return timezone.utc


def _seconds_until(now: datetime, target: datetime) -> int:
    delta = target.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    # Round up and never return 0: a zero TTL would expire immediately.
    return max(1, math.ceil(delta.total_seconds()))


class TTLPolicy:
    def __init__(self, tz: Optional[tzinfo] = None, clock: Callable[[], datetime] = utc_now):
        self.tz = tz or timezone.utc
        self.clock = clock

    def _local(self, now: Optional[datetime]) -> datetime:
        if now is None:
            now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz)

    def _midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def next_midnight(self, now: Optional[datetime] = None) -> datetime:
        local = self._local(now)
        return self._midnight(local.date() + timedelta(days=1))

    def next_week_boundary(self, now: Optional[datetime] = None) -> datetime:
        local = self._local(now)
        days_ahead = (WEEK_BOUNDARY_WEEKDAY - local.weekday()) % 7 or 7
        return self._midnight(local.date() + timedelta(days=days_ahead))

    def ttl_until_next_midnight(self, now: Optional[datetime] = None) -> int:
        local = self._local(now)
        return _seconds_until(local, self.next_midnight(local))

    def ttl_until_next_week_boundary(self, now: Optional[datetime] = None) -> int:
        local = self._local(now)
        return _seconds_until(local, self.next_week_boundary(local))

    def ttl_for_view(self, view_type: Union[ViewType, str], now: Optional[datetime] = None) -> int:
        view = ViewType(view_type)
        if view is ViewType.TODAY:
            return self.ttl_until_next_midnight(now)
        return self.ttl_until_next_week_boundary(now)

    def expiration_info(self, view_type: Union[ViewType, str], now: Optional[datetime] = None) -> ExpirationInfo:
        view = ViewType(view_type)
        local = self._local(now)
        if view is ViewType.TODAY:
            boundary = self.next_midnight(local)
        else:
            boundary = self.next_week_boundary(local)
        return ExpirationInfo(
            expires_at=boundary,
            description=EXPIRY_DESCRIPTIONS[view],
            ttl_seconds=_seconds_until(local, boundary),
        )
