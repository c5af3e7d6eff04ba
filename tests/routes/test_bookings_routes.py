from __future__ import annotations

from datetime import timedelta

from tests.helpers import headers_for


def _payload(room, start, minutes: int = 60, title: str = "Standup") -> dict:
    return {
        "room_id": room.id,
        "title": title,
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(minutes=minutes)).isoformat(),
    }


def test_create_and_fetch_booking(client, member_user, room, slot_start) -> None:
    response = client.post("/api/v1/bookings", json=_payload(room, slot_start), headers=headers_for(member_user))

    assert response.status_code == 201
    body = response.json()
    assert body["owner_id"] == member_user.id
    assert body["room_name"] == room.name
    assert body["cancelled"] is False

    fetched = client.get(f"/api/v1/bookings/{body['id']}", headers=headers_for(member_user))
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


def test_requires_identity(client, room, slot_start) -> None:
    response = client.post("/api/v1/bookings", json=_payload(room, slot_start))
    assert response.status_code == 401
    assert response.json()["code"] == "Unauthenticated"


def test_conflict_is_409_problem(client, member_user, other_member, room, slot_start) -> None:
    client.post("/api/v1/bookings", json=_payload(room, slot_start), headers=headers_for(member_user))

    clash = client.post(
        "/api/v1/bookings",
        json=_payload(room, slot_start + timedelta(minutes=30)),
        headers=headers_for(other_member),
    )

    assert clash.status_code == 409
    assert clash.headers["content-type"].startswith("application/problem+json")
    problem = clash.json()
    assert problem["code"] == "TimeConflict"
    assert problem["errors"]["source"] == "booking"
    assert problem["instance"] == "/api/v1/bookings"

    adjacent = client.post(
        "/api/v1/bookings",
        json=_payload(room, slot_start + timedelta(minutes=60)),
        headers=headers_for(other_member),
    )
    assert adjacent.status_code == 201


def test_grid_violations_are_422(client, member_user, room, slot_start) -> None:
    response = client.post(
        "/api/v1/bookings",
        json=_payload(room, slot_start + timedelta(minutes=10)),
        headers=headers_for(member_user),
    )
    assert response.status_code == 422
    assert response.json()["code"] == "MisalignedTime"


def test_viewer_is_forbidden(client, viewer_user, room, slot_start) -> None:
    response = client.post("/api/v1/bookings", json=_payload(room, slot_start), headers=headers_for(viewer_user))
    assert response.status_code == 403
    assert response.json()["code"] == "RoleNotPermitted"


def test_malformed_body_is_400(client, member_user, room) -> None:
    response = client.post(
        "/api/v1/bookings",
        json={"room_id": room.id, "title": "x", "start_time": "tomorrow"},
        headers=headers_for(member_user),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "InvalidInput"


def test_edit_and_cancel(client, member_user, other_member, room, slot_start) -> None:
    created = client.post(
        "/api/v1/bookings", json=_payload(room, slot_start), headers=headers_for(member_user)
    ).json()

    forbidden = client.patch(
        f"/api/v1/bookings/{created['id']}", json={"title": "Hijack"}, headers=headers_for(other_member)
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "NotOwner"

    edited = client.patch(
        f"/api/v1/bookings/{created['id']}",
        json={"title": "Retro", "notes": "room 2"},
        headers=headers_for(member_user),
    )
    assert edited.status_code == 200
    assert edited.json()["title"] == "Retro"

    cancelled = client.post(f"/api/v1/bookings/{created['id']}/cancel", headers=headers_for(member_user))
    assert cancelled.status_code == 200
    assert cancelled.json()["cancelled"] is True

    again = client.post(f"/api/v1/bookings/{created['id']}/cancel", headers=headers_for(member_user))
    assert again.status_code == 200

    history = client.get("/api/v1/bookings/history", headers=headers_for(member_user))
    assert [b["id"] for b in history.json()] == [created["id"]]


def test_admin_acting_as_member(client, admin_user, member_user, room, slot_start) -> None:
    response = client.post(
        "/api/v1/bookings",
        json=_payload(room, slot_start),
        headers=headers_for(admin_user, acting_as=member_user),
    )
    assert response.status_code == 201
    assert response.json()["owner_id"] == member_user.id


def test_member_cannot_act_as_someone_else(client, member_user, other_member, room, slot_start) -> None:
    response = client.post(
        "/api/v1/bookings",
        json=_payload(room, slot_start),
        headers=headers_for(member_user, acting_as=other_member),
    )
    assert response.status_code == 403


def test_unknown_booking_is_404(client, member_user) -> None:
    response = client.get("/api/v1/bookings/01HZZZZZZZZZZZZZZZZZZZZZZZ", headers=headers_for(member_user))
    assert response.status_code == 404
    assert response.json()["code"] == "NotFound"
