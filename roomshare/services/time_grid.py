# roomshare/services/time_grid.py
"""
Time-grid validation for candidate booking intervals.

Pure functions of (candidate, settings snapshot, now). Checks run in a
fixed order and the first violated rule is raised:

1. start and end aligned to the granularity, counted from the Unix epoch
2. duration within the configured cap
3. start within the advance window
4. start strictly in the future
"""

from datetime import datetime, timedelta, timezone

from ..core.exceptions import (
    DurationExceededException,
    InThePastException,
    MisalignedTimeException,
    TooFarInAdvanceException,
    ValidationException,
)
from .settings_service import SettingsSnapshot

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_aligned(instant: datetime, granularity_minutes: int) -> bool:
    """True when ``instant`` is a whole multiple of the granularity since the epoch."""
    offset = instant - EPOCH
    return offset % timedelta(minutes=granularity_minutes) == timedelta(0)


def validate_interval_shape(start: datetime, end: datetime) -> None:
    """Reject intervals the grid checks cannot reason about."""
    if start.tzinfo is None or end.tzinfo is None:
        raise ValidationException("Start and end must include a timezone offset")
    if end <= start:
        raise ValidationException("End time must be after start time")


def validate_time_grid(
    start: datetime, end: datetime, snapshot: SettingsSnapshot, now: datetime
) -> None:
    """
    Validate a candidate interval against the settings grid.

    Raises:
        ValidationException: malformed interval
        MisalignedTimeException: start or end off the granularity grid
        DurationExceededException: longer than max_booking_duration_hours
        TooFarInAdvanceException: start beyond now + max_advance_days
        InThePastException: start not after now
    """
    validate_interval_shape(start, end)

    granularity = snapshot.granularity_minutes
    if not (is_aligned(start, granularity) and is_aligned(end, granularity)):
        raise MisalignedTimeException(granularity)

    duration = end - start
    if duration > timedelta(hours=snapshot.max_booking_duration_hours):
        raise DurationExceededException(
            snapshot.max_booking_duration_hours, int(duration.total_seconds() // 60)
        )

    if start > now + timedelta(days=snapshot.max_advance_days):
        raise TooFarInAdvanceException(snapshot.max_advance_days)

    if start <= now:
        raise InThePastException()
