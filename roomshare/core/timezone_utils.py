"""
Timezone utilities for the roomshare backend.

All instants are handled as timezone-aware UTC datetimes. Calendar dates,
weekdays and minutes-of-day are interpreted in the single facility
timezone configured in settings.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz

from .config import settings

MINUTES_PER_DAY = 24 * 60


def get_facility_timezone(name: Optional[str] = None) -> pytz.BaseTzInfo:
    """Return the configured facility timezone as a pytz object."""
    return pytz.timezone(name or settings.facility_timezone)


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are assumed to already be UTC (this is how SQLite
    hands them back).
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_facility_time(dt: datetime) -> datetime:
    """Convert an instant to the facility timezone."""
    return ensure_utc(dt).astimezone(get_facility_timezone())


def facility_today(now: Optional[datetime] = None) -> date:
    """'Today' in the facility timezone."""
    return to_facility_time(now or utc_now()).date()


def day_of_week(day: date) -> int:
    """
    Day-of-week index with 0 = Sunday ... 6 = Saturday.

    Recurring rules are stored with this convention.
    """
    return (day.weekday() + 1) % 7


def minute_of_day(dt: datetime) -> int:
    """Minutes since local midnight of an instant, in the facility timezone."""
    local = to_facility_time(dt)
    return local.hour * 60 + local.minute


def local_instant(day: date, minute: int) -> datetime:
    """
    Build the UTC instant for ``minute`` minutes past local midnight of ``day``.

    ``minute`` may be 1440, which resolves to midnight of the following day.
    """
    tz = get_facility_timezone()
    extra_days, remainder = divmod(minute, MINUTES_PER_DAY)
    target_day = day + timedelta(days=extra_days)
    naive = datetime.combine(target_day, time(remainder // 60, remainder % 60))
    return tz.localize(naive).astimezone(timezone.utc)


def local_day_start(day: date) -> datetime:
    """UTC instant of local midnight at the start of ``day``."""
    return local_instant(day, 0)


def iter_dates(start: date, end: date):
    """Yield each calendar date in ``[start, end)``."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)
