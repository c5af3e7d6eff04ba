"""
Property: for any sequence of create/cancel requests in a room, a create
succeeds exactly when its interval is free of every active booking and of
every non-excepted recurring occurrence, and fails with TimeConflict
otherwise.
"""

from __future__ import annotations

from datetime import date, timedelta

from hypothesis import HealthCheck, given, settings, strategies as st
import pytest
from sqlalchemy.orm import sessionmaker

from roomshare.core.enums import UserRole
from roomshare.core.exceptions import BookingConflictException
from roomshare.core.timezone_utils import local_instant
from roomshare.database import Base
from roomshare.models.booking import Booking
from roomshare.models.recurring_booking import RecurringBookingRule
from roomshare.models.room import Room
from roomshare.models.user import User
from roomshare.services.booking_service import BookingService
from roomshare.services.settings_service import SettingsService
from roomshare.utils.intervals import overlaps
from tests.helpers import FrozenClock, at, make_engine, principal_for

# Wednesday 10:00-11:00; the first Wednesday in range is excepted
RULE_WEEKDAY = 3
RULE_START_MINUTE = 600
RULE_END_MINUTE = 660
EXCEPTED_WEDNESDAY = date(2026, 3, 4)
ACTIVE_WEDNESDAY = date(2026, 3, 11)

# (day offset from 2026-03-03, start slot, length in slots, cancel the first booking first)
requests = st.lists(
    st.tuples(
        st.integers(min_value=0, max_value=8),
        st.integers(min_value=0, max_value=20),
        st.integers(min_value=1, max_value=8),
        st.booleans(),
    ),
    min_size=1,
    max_size=25,
)


def _rule_blocks(start, end) -> bool:
    occ_start = local_instant(ACTIVE_WEDNESDAY, RULE_START_MINUTE)
    occ_end = local_instant(ACTIVE_WEDNESDAY, RULE_END_MINUTE)
    return overlaps(start, end, occ_start, occ_end)


@settings(max_examples=40, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(requests)
def test_create_succeeds_iff_interval_is_free(batch) -> None:
    engine = make_engine()
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        admin = User(name="Admin", email="admin@example.com", role=UserRole.ADMIN.value)
        room = Room(name="Property Room")
        session.add_all([admin, room])
        session.flush()
        session.add(
            RecurringBookingRule(
                room_id=room.id,
                owner_id=admin.id,
                title="Weekly sync",
                day_of_week=RULE_WEEKDAY,
                start_minute=RULE_START_MINUTE,
                end_minute=RULE_END_MINUTE,
                exception_dates=[EXCEPTED_WEDNESDAY.isoformat()],
                cancelled=False,
            )
        )
        session.commit()
        principal = principal_for(admin)

        SettingsService(session).update_settings(
            principal,
            granularity_minutes=30,
            max_advance_days=30,
            max_booking_duration_hours=4,
            max_active_bookings=50,
        )
        service = BookingService(session, clock=FrozenClock())

        # id -> (start, end) of bookings that should currently be active
        active = {}
        first_id = None
        for day_offset, slot, length, cancel_first in batch:
            if cancel_first and first_id is not None:
                service.cancel_booking(first_id, principal)
                active.pop(first_id, None)

            start = at(3 + day_offset, 8) + timedelta(minutes=30 * slot)
            end = start + timedelta(minutes=30 * length)
            free = not _rule_blocks(start, end) and not any(
                overlaps(start, end, s, e) for s, e in active.values()
            )

            if free:
                booking = service.create_booking(
                    principal, room_id=room.id, title="p", start=start, end=end
                )
                active[booking.id] = (start, end)
                if first_id is None:
                    first_id = booking.id
            else:
                with pytest.raises(BookingConflictException):
                    service.create_booking(
                        principal, room_id=room.id, title="p", start=start, end=end
                    )

        stored = session.query(Booking).filter(Booking.cancelled.is_(False)).all()
        assert {b.id for b in stored} == set(active)
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


def test_excepted_date_does_not_block(db, admin, room, clock) -> None:
    db.add(
        RecurringBookingRule(
            room_id=room.id,
            owner_id=admin.authenticated_user_id,
            title="Weekly sync",
            day_of_week=RULE_WEEKDAY,
            start_minute=RULE_START_MINUTE,
            end_minute=RULE_END_MINUTE,
            exception_dates=[EXCEPTED_WEDNESDAY.isoformat()],
            cancelled=False,
        )
    )
    db.commit()
    service = BookingService(db, clock=clock)

    booking = service.create_booking(
        admin, room_id=room.id, title="Free", start=at(4, 10), end=at(4, 11)
    )
    assert booking.id

    with pytest.raises(BookingConflictException):
        service.create_booking(admin, room_id=room.id, title="Taken", start=at(11, 10), end=at(11, 11))
