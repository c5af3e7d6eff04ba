from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from roomshare.core import timezone_utils
from roomshare.core.timezone_utils import (
    day_of_week,
    ensure_utc,
    iter_dates,
    local_instant,
    minute_of_day,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 3, 1), 0),  # Sunday
        (date(2026, 3, 2), 1),  # Monday
        (date(2026, 3, 7), 6),  # Saturday
    ],
)
def test_day_of_week_counts_from_sunday(day: date, expected: int) -> None:
    assert day_of_week(day) == expected


def test_local_instant_in_utc_facility() -> None:
    assert local_instant(date(2026, 3, 2), 540) == datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def test_local_instant_accepts_end_of_day() -> None:
    assert local_instant(date(2026, 3, 2), 1440) == datetime(2026, 3, 3, 0, 0, tzinfo=timezone.utc)


def test_local_instant_follows_facility_timezone(monkeypatch) -> None:
    monkeypatch.setattr(timezone_utils.settings, "facility_timezone", "America/New_York")
    # EST is UTC-5 before the March 8 2026 DST switch
    assert local_instant(date(2026, 3, 2), 540) == datetime(2026, 3, 2, 14, 0, tzinfo=timezone.utc)
    # EDT is UTC-4 after it
    assert local_instant(date(2026, 3, 9), 540) == datetime(2026, 3, 9, 13, 0, tzinfo=timezone.utc)
    assert minute_of_day(datetime(2026, 3, 9, 13, 0, tzinfo=timezone.utc)) == 540


def test_ensure_utc_tags_naive_values() -> None:
    naive = datetime(2026, 3, 2, 10, 0)
    assert ensure_utc(naive).tzinfo == timezone.utc


def test_iter_dates_is_half_open() -> None:
    assert list(iter_dates(date(2026, 3, 1), date(2026, 3, 4))) == [
        date(2026, 3, 1),
        date(2026, 3, 2),
        date(2026, 3, 3),
    ]
    assert list(iter_dates(date(2026, 3, 1), date(2026, 3, 1))) == []
