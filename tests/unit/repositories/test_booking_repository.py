from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from roomshare.models.booking import Booking
from roomshare.repositories.booking_repository import BookingRepository
from roomshare.repositories.conflict_checker_repository import ConflictCheckerRepository

from tests.helpers import FIXED_NOW, at


def _create_booking(db, room, owner, start, end, *, cancelled=False, title="Sync"):
    booking = Booking(
        room_id=room.id,
        owner_id=owner.id,
        title=title,
        start_time=start,
        end_time=end,
        cancelled=cancelled,
    )
    db.add(booking)
    db.commit()
    return booking


def test_count_active_ignores_cancelled_and_ended(db, room, member_user):
    _create_booking(db, room, member_user, at(2, 9), at(2, 10))
    _create_booking(db, room, member_user, at(3, 9), at(3, 10), cancelled=True)
    _create_booking(db, room, member_user, at(1, 6), at(1, 7))

    repo = BookingRepository(db)
    assert repo.count_active_for_owner(member_user.id, FIXED_NOW) == 1


def test_window_is_half_open(db, room, member_user):
    inside = _create_booking(db, room, member_user, at(2, 9), at(2, 10))
    _create_booking(db, room, member_user, at(2, 10), at(2, 11))
    _create_booking(db, room, member_user, at(2, 8), at(2, 9))

    rows = BookingRepository(db).get_room_bookings_in_window(room.id, at(2, 9), at(2, 10))
    assert [r.id for r in rows] == [inside.id]


def test_history_is_newest_first_and_keeps_cancelled(db, room, member_user):
    older = _create_booking(db, room, member_user, at(2, 9), at(2, 10))
    newer = _create_booking(db, room, member_user, at(4, 9), at(4, 10), cancelled=True)

    rows = BookingRepository(db).get_history_for_owner(member_user.id)
    assert [r.id for r in rows] == [newer.id, older.id]
    assert rows[0].room.name == room.name


def test_delete_for_owner_only_touches_that_owner(db, room, member_user, other_member):
    _create_booking(db, room, member_user, at(2, 9), at(2, 10))
    _create_booking(db, room, member_user, at(3, 9), at(3, 10))
    kept = _create_booking(db, room, other_member, at(4, 9), at(4, 10))

    repo = BookingRepository(db)
    assert repo.delete_for_owner(member_user.id) == 2
    db.commit()

    assert db.query(Booking).count() == 1
    assert db.query(Booking).one().id == kept.id


def test_same_slot_twice_hits_unique_index(db, room, member_user, other_member):
    _create_booking(db, room, member_user, at(2, 9), at(2, 10))

    repo = BookingRepository(db)
    with pytest.raises(IntegrityError):
        repo.create(
            room_id=room.id,
            owner_id=other_member.id,
            title="Race",
            start_time=at(2, 9),
            end_time=at(2, 10),
            cancelled=False,
        )
    db.rollback()


def test_cancelled_slot_can_be_reused(db, room, member_user, other_member):
    _create_booking(db, room, member_user, at(2, 9), at(2, 10), cancelled=True)
    _create_booking(db, room, other_member, at(2, 9), at(2, 10))

    assert db.query(Booking).count() == 2


def test_conflict_queries_exclude_the_edited_booking(db, room, member_user):
    booking = _create_booking(db, room, member_user, at(2, 9), at(2, 10))
    repo = ConflictCheckerRepository(db)

    assert [b.id for b in repo.get_overlapping_bookings(room.id, at(2, 9, 30), at(2, 11))] == [booking.id]
    assert repo.get_overlapping_bookings(room.id, at(2, 9), at(2, 10), exclude_booking_id=booking.id) == []
    assert repo.get_overlapping_bookings(room.id, at(2, 10), at(2, 11)) == []
