from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from roomshare.core.enums import ErrorKind
from roomshare.core.exceptions import (
    DomainException,
    DurationExceededException,
    InThePastException,
    MisalignedTimeException,
    TooFarInAdvanceException,
    ValidationException,
)
from roomshare.services.settings_service import SettingsSnapshot
from roomshare.services.time_grid import is_aligned, validate_time_grid
from tests.helpers import FIXED_NOW, at


def snapshot(granularity: int = 30, advance: int = 30, hours: int = 4, quota: int = 5):
    return SettingsSnapshot(
        granularity_minutes=granularity,
        max_advance_days=advance,
        max_booking_duration_hours=hours,
        max_active_bookings=quota,
    )


@pytest.mark.parametrize(
    "granularity, minute, aligned",
    [
        (15, 0, True),
        (15, 15, True),
        (15, 45, True),
        (15, 10, False),
        (30, 30, True),
        (30, 15, False),
        (60, 0, True),
        (60, 30, False),
    ],
)
def test_alignment(granularity: int, minute: int, aligned: bool) -> None:
    assert is_aligned(at(3, 10, minute), granularity) is aligned


def test_seconds_break_alignment() -> None:
    assert not is_aligned(at(3, 10) + timedelta(seconds=1), 15)


@pytest.mark.parametrize("granularity", [15, 30, 60])
def test_aligned_candidate_passes(granularity: int) -> None:
    start = at(3, 10)
    validate_time_grid(start, start + timedelta(minutes=granularity), snapshot(granularity), FIXED_NOW)


@pytest.mark.parametrize("granularity", [15, 30, 60])
def test_misaligned_end_is_rejected(granularity: int) -> None:
    start = at(3, 10)
    with pytest.raises(MisalignedTimeException) as exc_info:
        validate_time_grid(
            start, start + timedelta(minutes=granularity + 5), snapshot(granularity), FIXED_NOW
        )
    assert exc_info.value.details == {"granularity_minutes": granularity}


def test_duration_cap() -> None:
    start = at(3, 10)
    validate_time_grid(start, start + timedelta(hours=4), snapshot(), FIXED_NOW)
    with pytest.raises(DurationExceededException) as exc_info:
        validate_time_grid(start, start + timedelta(hours=4, minutes=30), snapshot(), FIXED_NOW)
    assert exc_info.value.details["max_hours"] == 4


def test_advance_window() -> None:
    limit = FIXED_NOW + timedelta(days=30)
    validate_time_grid(limit, limit + timedelta(minutes=30), snapshot(), FIXED_NOW)
    late = limit + timedelta(minutes=30)
    with pytest.raises(TooFarInAdvanceException) as exc_info:
        validate_time_grid(late, late + timedelta(minutes=30), snapshot(), FIXED_NOW)
    assert exc_info.value.details == {"max_days": 30}


def test_start_equal_to_now_is_in_the_past() -> None:
    with pytest.raises(InThePastException):
        validate_time_grid(FIXED_NOW, FIXED_NOW + timedelta(minutes=30), snapshot(), FIXED_NOW)


def test_first_violation_wins() -> None:
    # misaligned, too long and in the past: alignment is reported
    start = FIXED_NOW - timedelta(days=1, minutes=7)
    with pytest.raises(DomainException) as exc_info:
        validate_time_grid(start, start + timedelta(hours=9), snapshot(), FIXED_NOW)
    assert exc_info.value.kind == ErrorKind.MISALIGNED_TIME

    # aligned but too long and in the past: duration is reported
    start = FIXED_NOW - timedelta(days=1)
    with pytest.raises(DomainException) as exc_info:
        validate_time_grid(start, start + timedelta(hours=9), snapshot(), FIXED_NOW)
    assert exc_info.value.kind == ErrorKind.DURATION_EXCEEDED


def test_malformed_interval_is_invalid_input() -> None:
    with pytest.raises(ValidationException):
        validate_time_grid(at(3, 11), at(3, 10), snapshot(), FIXED_NOW)
    with pytest.raises(ValidationException):
        validate_time_grid(datetime(2026, 3, 3, 10), datetime(2026, 3, 3, 11), snapshot(), FIXED_NOW)
