"""End-to-end tests through the HTTP API."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _default_admin(monkeypatch):
    monkeypatch.delenv("ADMIN_USER", raising=False)
    monkeypatch.delenv("ADMIN_PASS", raising=False)


def _create_student(client, first, last, years=None):
    response = client.post(
        "/students", json={"first_name": first, "last_name": last, "years_on_team": years}
    )
    assert response.status_code == 201
    return response.json()["student"]["id"]


def _create_event(client, hours=2.0, name="Robotics demo", event_date="2025-04-01"):
    response = client.post(
        "/outreach/events",
        json={"event_name": name, "event_date": event_date, "hours_length": hours},
    )
    assert response.status_code == 201
    return response.json()["event"]["id"]


def _add(client, event_id, student_id, role):
    return client.post(
        f"/outreach/events/{event_id}/participants",
        json={"student_id": student_id, "participation_type": role},
    )


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_config_exposes_scoring_policy(client):
    scoring = client.get("/config").json()["scoring"]

    assert scoring["base_points"] == {"organizer": 8, "assistant": 5}
    assert scoring["requirements"]["returning"] == {"points": 18, "organizer_events": 1}


def test_length_edit_rescores_and_reports(client):
    ava = _create_student(client, "Ava", "Lee", years=0)
    ben = _create_student(client, "Ben", "Ortiz", years=2)
    event_id = _create_event(client, hours=2)
    assert _add(client, event_id, ava, "organizer").json()["participation"]["points_awarded"] == 8
    assert _add(client, event_id, ben, "assistant").json()["participation"]["points_awarded"] == 5

    response = client.put(f"/outreach/events/{event_id}", json={"hours_length": 5})

    assert response.status_code == 200
    assert response.json()["points_recalculated"] is True
    participants = client.get(f"/outreach/events/{event_id}/participants").json()["participants"]
    assert [(p["first_name"], p["points_awarded"]) for p in participants] == [
        ("Ava", 16),
        ("Ben", 10),
    ]

    noop = client.patch(f"/outreach/events/{event_id}", json={"hours_length": 5})
    assert noop.json()["points_recalculated"] is False

    board = client.get("/outreach/leaderboard").json()["leaderboard"]
    assert [entry["first_name"] for entry in board] == ["Ava", "Ben"]
    assert board[0]["requirements_met"] is True
    assert board[0]["cohort"] == "new"
    assert board[1]["requirements_met"] is False
    assert board[1]["points_needed"] == 8
    assert board[1]["events_needed"] == 1


def test_event_listing_includes_participant_counts(client):
    student = _create_student(client, "Ava", "Lee")
    first = _create_event(client, name="Fall fair", event_date="2024-10-05")
    second = _create_event(client, name="Spring expo", event_date="2025-04-12")
    _add(client, first, student, "assistant")

    listed = client.get("/outreach/events").json()["events"]

    assert [(e["id"], e["participant_count"]) for e in listed] == [(second, 0), (first, 1)]


def test_invalid_role_is_a_client_error(client):
    student = _create_student(client, "Ava", "Lee")
    event_id = _create_event(client)

    response = _add(client, event_id, student, "mascot")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "InvalidRole"
    assert body["code"] == "INVALID_ROLE"


def test_duplicate_participation_conflicts(client):
    student = _create_student(client, "Ava", "Lee")
    event_id = _create_event(client)
    assert _add(client, event_id, student, "assistant").status_code == 201

    response = _add(client, event_id, student, "organizer")

    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_PARTICIPATION"
    participants = client.get(f"/outreach/events/{event_id}/participants").json()["participants"]
    assert len(participants) == 1


def test_missing_event_is_not_found(client):
    student = _create_student(client, "Ava", "Lee")

    assert _add(client, 321, student, "organizer").json()["code"] == "EVENT_NOT_FOUND"
    assert client.get("/outreach/events/321/participants").status_code == 404
    assert client.put("/outreach/events/321", json={"hours_length": 1}).status_code == 404


def test_negative_length_fails_validation(client):
    response = client.post(
        "/outreach/events",
        json={"event_name": "Bad", "event_date": "2025-01-01", "hours_length": -2},
    )

    assert response.status_code == 422


def test_remove_participant_twice(client):
    student = _create_student(client, "Ava", "Lee")
    event_id = _create_event(client)
    participation_id = _add(client, event_id, student, "assistant").json()["participation"]["id"]
    url = f"/outreach/events/{event_id}/participants/{participation_id}"

    assert client.delete(url).json()["removed"] is True
    assert client.delete(url).json()["removed"] is False


def test_delete_event_removes_participation(client):
    student = _create_student(client, "Ava", "Lee")
    event_id = _create_event(client)
    _add(client, event_id, student, "organizer")

    response = client.delete(f"/outreach/events/{event_id}")

    assert response.json()["participations_deleted"] == 1
    history = client.get(f"/outreach/students/{student}/participation").json()["participation"]
    assert history == []


def test_student_tenure_update(client):
    student = _create_student(client, "Ava", "Lee")

    response = client.put(f"/students/{student}/years-on-team", json={"years_on_team": 2})

    assert response.json()["student"]["years_on_team"] == 2
    roster = client.get("/outreach/students").json()["students"]
    assert roster[0]["years_on_team"] == 2


def test_reset_requires_admin(client):
    student = _create_student(client, "Ava", "Lee")
    _add(client, _create_event(client), student, "organizer")

    assert client.post("/outreach/reset-leaderboard").status_code == 401
    assert (
        client.post("/outreach/reset-leaderboard", auth=("admin", "wrong")).status_code == 401
    )

    response = client.post("/outreach/reset-leaderboard", auth=("admin", "changeme"))

    assert response.status_code == 200
    assert response.json()["events_deleted"] == 1
    assert response.json()["participations_deleted"] == 1
    assert client.get("/outreach/events").json()["events"] == []


@pytest.mark.parametrize("field", ["event_date", "event_name"])
def test_clearing_required_event_field_is_rejected(client, field):
    event_id = _create_event(client)

    response = client.patch(f"/outreach/events/{event_id}", json={field: None})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_EVENT"
    assert client.get(f"/outreach/events/{event_id}").json()["event"]["event_date"] == "2025-04-01"


def test_remove_participant_through_other_event_keeps_record(client):
    student = _create_student(client, "Ava", "Lee")
    owner = _create_event(client, name="Fall fair")
    other = _create_event(client, name="Spring expo")
    participation_id = _add(client, owner, student, "organizer").json()["participation"]["id"]

    response = client.delete(f"/outreach/events/{other}/participants/{participation_id}")

    assert response.status_code == 200
    assert response.json()["removed"] is False
    participants = client.get(f"/outreach/events/{owner}/participants").json()["participants"]
    assert [p["id"] for p in participants] == [participation_id]


@pytest.mark.parametrize("hours", [100, 1e20])
def test_event_length_is_capped(client, hours):
    created = client.post(
        "/outreach/events",
        json={"event_name": "Marathon", "event_date": "2025-01-01", "hours_length": hours},
    )
    assert created.status_code == 422

    event_id = _create_event(client)
    updated = client.put(f"/outreach/events/{event_id}", json={"hours_length": hours})
    assert updated.status_code == 422
