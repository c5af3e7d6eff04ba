from __future__ import annotations

import pytest

from roomshare.core.exceptions import (
    NotFoundException,
    RoleNotPermittedException,
    ValidationException,
)
from roomshare.services.room_service import RoomService
from tests.helpers import at


@pytest.fixture
def service(db, clock) -> RoomService:
    return RoomService(db, clock=clock)


def test_admin_manages_rooms(service, admin) -> None:
    room = service.create_room(admin, name="  Lab  ", description="Ground floor")
    assert room.name == "Lab"

    service.update_room(room.id, admin, name="Lab 2")
    assert service.get_room(room.id).name == "Lab 2"
    assert service.get_room(room.id).description == "Ground floor"

    service.set_disabled(room.id, admin, True)
    assert service.list_rooms() == []
    assert [r.id for r in service.list_rooms(include_disabled=True)] == [room.id]


def test_member_cannot_manage_rooms(service, member, room) -> None:
    with pytest.raises(RoleNotPermittedException):
        service.create_room(member, name="Mine")
    with pytest.raises(RoleNotPermittedException):
        service.set_disabled(room.id, member, True)


def test_room_name_is_required(service, admin) -> None:
    with pytest.raises(ValidationException):
        service.create_room(admin, name="   ")


def test_blocked_ranges(service, admin, room) -> None:
    blocked = service.create_blocked_range(
        room.id, admin, start=at(4, 8), end=at(4, 12), reason="Cleaning"
    )

    assert [b.id for b in service.list_blocked_ranges(room.id, at(4, 11), at(4, 13))] == [blocked.id]
    assert service.list_blocked_ranges(room.id, at(4, 12), at(4, 13)) == []

    service.delete_blocked_range(blocked.id, admin)
    assert service.list_blocked_ranges(room.id) == []


def test_blocked_range_shape(service, admin, room) -> None:
    with pytest.raises(ValidationException):
        service.create_blocked_range(room.id, admin, start=at(4, 12), end=at(4, 8))
    with pytest.raises(ValidationException):
        service.create_blocked_range(room.id, admin, start=at(4, 8), end=at(4, 9), reason="r" * 201)


def test_blocked_range_requires_admin(service, member, room) -> None:
    with pytest.raises(RoleNotPermittedException):
        service.create_blocked_range(room.id, member, start=at(4, 8), end=at(4, 9))


def test_delete_missing_blocked_range(service, admin) -> None:
    with pytest.raises(NotFoundException):
        service.delete_blocked_range("missing", admin)
