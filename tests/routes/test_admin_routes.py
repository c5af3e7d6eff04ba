from __future__ import annotations

from datetime import timedelta

from tests.helpers import headers_for


def _rule_payload(room, day_of_week: int, start_minute: int = 540, end_minute: int = 600) -> dict:
    return {
        "room_id": room.id,
        "title": "Weekly sync",
        "day_of_week": day_of_week,
        "start_minute": start_minute,
        "end_minute": end_minute,
    }


def _weekday(instant) -> int:
    # 0 = Sunday
    return (instant.weekday() + 1) % 7


def test_member_cannot_create_rule_even_with_bad_body(client, member_user) -> None:
    response = client.post(
        "/api/v1/recurring-rules",
        json={"title": "missing everything"},
        headers=headers_for(member_user),
    )
    assert response.status_code == 403
    assert response.json()["code"] == "RoleNotPermitted"


def test_rule_occurrences_in_calendar(client, admin_user, member_user, room, slot_start) -> None:
    weekday = _weekday(slot_start)
    created = client.post(
        "/api/v1/recurring-rules", json=_rule_payload(room, weekday), headers=headers_for(admin_user)
    )
    assert created.status_code == 201
    rule = created.json()
    assert rule["exception_dates"] == []

    booked = client.post(
        "/api/v1/bookings",
        json={
            "room_id": room.id,
            "title": "After the sync",
            "start_time": slot_start.isoformat(),
            "end_time": (slot_start + timedelta(minutes=30)).isoformat(),
        },
        headers=headers_for(member_user),
    )
    assert booked.status_code == 201

    day = slot_start.date()
    calendar = client.get(
        f"/api/v1/rooms/{room.id}/occurrences",
        params={"start": day.isoformat(), "end": (day + timedelta(days=1)).isoformat()},
        headers=headers_for(member_user),
    )
    assert calendar.status_code == 200
    occurrences = calendar.json()["occurrences"]
    assert [occ["kind"] for occ in occurrences] == ["recurring", "single"]
    assert occurrences[0]["rule_id"] == rule["id"]
    assert occurrences[0]["occurrence_date"] == day.isoformat()
    assert occurrences[1]["booking_id"] == booked.json()["id"]


def test_booking_over_rule_occurrence_conflicts(client, admin_user, member_user, room, slot_start) -> None:
    weekday = _weekday(slot_start)
    client.post(
        "/api/v1/recurring-rules",
        json=_rule_payload(room, weekday, start_minute=600, end_minute=660),
        headers=headers_for(admin_user),
    )

    response = client.post(
        "/api/v1/bookings",
        json={
            "room_id": room.id,
            "title": "Clash",
            "start_time": slot_start.isoformat(),
            "end_time": (slot_start + timedelta(minutes=60)).isoformat(),
        },
        headers=headers_for(member_user),
    )
    assert response.status_code == 409
    assert response.json()["errors"]["source"] == "recurring"


def test_cancel_occurrence_and_series(client, admin_user, room, slot_start) -> None:
    weekday = _weekday(slot_start)
    rule = client.post(
        "/api/v1/recurring-rules", json=_rule_payload(room, weekday), headers=headers_for(admin_user)
    ).json()
    day = slot_start.date().isoformat()

    first = client.post(
        f"/api/v1/recurring-rules/{rule['id']}/exceptions",
        json={"date": day},
        headers=headers_for(admin_user),
    )
    assert first.status_code == 200
    assert first.json()["exception_dates"] == [day]

    repeat = client.post(
        f"/api/v1/recurring-rules/{rule['id']}/exceptions",
        json={"date": day},
        headers=headers_for(admin_user),
    )
    assert repeat.json()["exception_dates"] == [day]

    bad_date = client.post(
        f"/api/v1/recurring-rules/{rule['id']}/exceptions",
        json={"date": "2026-13-01"},
        headers=headers_for(admin_user),
    )
    assert bad_date.status_code == 400
    assert bad_date.json()["code"] == "InvalidInput"

    cancelled = client.post(f"/api/v1/recurring-rules/{rule['id']}/cancel", headers=headers_for(admin_user))
    assert cancelled.status_code == 200
    assert cancelled.json()["cancelled"] is True

    listed = client.get(f"/api/v1/rooms/{room.id}/recurring-rules", headers=headers_for(admin_user))
    assert listed.json() == []


def test_settings_read_and_update(client, admin_user, member_user) -> None:
    current = client.get("/api/v1/settings", headers=headers_for(member_user))
    assert current.status_code == 200
    assert current.json()["granularity_minutes"] == 30

    payload = {
        "granularity_minutes": 15,
        "max_advance_days": 60,
        "max_booking_duration_hours": 8,
        "max_active_bookings": 10,
    }
    denied = client.put("/api/v1/settings", json=payload, headers=headers_for(member_user))
    assert denied.status_code == 403

    updated = client.put("/api/v1/settings", json=payload, headers=headers_for(admin_user))
    assert updated.status_code == 200
    assert updated.json() == payload

    out_of_range = client.put(
        "/api/v1/settings", json={**payload, "granularity_minutes": 3}, headers=headers_for(admin_user)
    )
    assert out_of_range.status_code == 400


def test_room_administration(client, admin_user, member_user, slot_start) -> None:
    created = client.post(
        "/api/v1/rooms", json={"name": "  Green Room  "}, headers=headers_for(admin_user)
    )
    assert created.status_code == 201
    room_id = created.json()["id"]
    assert created.json()["name"] == "Green Room"

    blocked = client.post(
        f"/api/v1/rooms/{room_id}/blocked-ranges",
        json={
            "start_time": slot_start.isoformat(),
            "end_time": (slot_start + timedelta(hours=2)).isoformat(),
            "reason": "Maintenance",
        },
        headers=headers_for(admin_user),
    )
    assert blocked.status_code == 201

    clash = client.post(
        "/api/v1/bookings",
        json={
            "room_id": room_id,
            "title": "Planning",
            "start_time": (slot_start + timedelta(hours=1)).isoformat(),
            "end_time": (slot_start + timedelta(hours=2)).isoformat(),
        },
        headers=headers_for(member_user),
    )
    assert clash.status_code == 409
    assert clash.json()["errors"]["source"] == "blocked"

    removed = client.delete(
        f"/api/v1/blocked-ranges/{blocked.json()['id']}", headers=headers_for(admin_user)
    )
    assert removed.status_code == 204

    disabled = client.post(
        f"/api/v1/rooms/{room_id}/disabled", json={"disabled": True}, headers=headers_for(admin_user)
    )
    assert disabled.json()["disabled"] is True
    assert client.get("/api/v1/rooms", headers=headers_for(member_user)).json() == []


def test_user_administration(client, admin_user, member_user) -> None:
    created = client.post(
        "/api/v1/users",
        json={"name": "New Person", "email": "New@Example.com", "role": "VIEWER"},
        headers=headers_for(admin_user),
    )
    assert created.status_code == 201
    assert created.json()["email"] == "new@example.com"

    promoted = client.patch(
        f"/api/v1/users/{member_user.id}/role", json={"role": "ADMIN"}, headers=headers_for(admin_user)
    )
    assert promoted.status_code == 200
    assert promoted.json()["role"] == "ADMIN"

    self_removal = client.delete(f"/api/v1/users/{admin_user.id}", headers=headers_for(admin_user))
    assert self_removal.status_code == 400

    removed = client.delete(f"/api/v1/users/{created.json()['id']}", headers=headers_for(admin_user))
    assert removed.status_code == 204


def test_health_and_metrics(client) -> None:
    health = client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    metrics = client.get("/metrics/prometheus")
    assert metrics.status_code == 200
    assert "# HELP roomshare_service_operations_total" in metrics.text


def test_unknown_room_listings_are_404(client, member_user) -> None:
    missing = "01HZZZZZZZZZZZZZZZZZZZZZZZ"
    for path in ("recurring-rules", "blocked-ranges"):
        response = client.get(f"/api/v1/rooms/{missing}/{path}", headers=headers_for(member_user))
        assert response.status_code == 404
        assert response.json()["code"] == "NotFound"


def test_user_admin_errors_are_problems(client, admin_user) -> None:
    missing = client.patch(
        "/api/v1/users/01HZZZZZZZZZZZZZZZZZZZZZZZ/role",
        json={"role": "ADMIN"},
        headers=headers_for(admin_user),
    )
    assert missing.status_code == 404
    assert missing.json()["code"] == "NotFound"

    duplicate = client.post(
        "/api/v1/users",
        json={"name": "Admin again", "email": admin_user.email},
        headers=headers_for(admin_user),
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "InvalidInput"
