import uuid
from datetime import datetime, timezone

from skills_hub.models import SchoolClass
from skills_hub.schemas import ClassCreate, ClassUpdate
from skills_hub.utils.dates import as_utc


def schedule(client, headers, **overrides):
    payload = {
        "subject": "Mathematics",
        "start_time": "2030-03-01T09:00:00Z",
        "end_time": "2030-03-01T10:00:00Z",
        "meeting_link": "https://meet.example.com/math",
    }
    payload.update(overrides)
    return client.post("/api/classes", json=payload, headers=headers)


def test_teacher_schedules_class(client, teacher_headers):
    response = schedule(client, teacher_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["teacher_name"] == "John Doe"
    assert data["teacher_subject"] == "Mathematics"


def test_end_must_follow_start(client, teacher_headers):
    response = schedule(
        client,
        teacher_headers,
        start_time="2030-03-01T10:00:00Z",
        end_time="2030-03-01T09:00:00Z",
    )
    assert response.status_code == 400
    assert response.json()["error"] == "End time must be after start time"

    response = schedule(
        client,
        teacher_headers,
        start_time="2030-03-01T10:00:00Z",
        end_time="2030-03-01T10:00:00Z",
    )
    assert response.status_code == 400


def test_update_checks_merged_times(client, teacher_headers):
    school_class = schedule(client, teacher_headers).json()["data"]

    response = client.put(
        f"/api/classes/{school_class['id']}",
        json={"start_time": "2030-03-01T11:00:00Z"},
        headers=teacher_headers,
    )
    assert response.status_code == 400

    response = client.put(
        f"/api/classes/{school_class['id']}",
        json={"end_time": "2030-03-01T11:30:00Z", "subject": "Algebra"},
        headers=teacher_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["subject"] == "Algebra"


def test_upcoming_filter(client, teacher_headers, student_headers):
    schedule(
        client,
        teacher_headers,
        subject="History",
        start_time="2001-01-01T09:00:00Z",
        end_time="2001-01-01T10:00:00Z",
    )
    schedule(client, teacher_headers)

    response = client.get("/api/classes", headers=student_headers)
    assert [c["subject"] for c in response.json()["data"]] == ["History", "Mathematics"]

    response = client.get("/api/classes?upcoming=true", headers=student_headers)
    assert [c["subject"] for c in response.json()["data"]] == ["Mathematics"]


def test_students_cannot_schedule(client, student_headers):
    assert schedule(client, student_headers).status_code == 403


def test_delete_class(client, teacher_headers):
    school_class = schedule(client, teacher_headers).json()["data"]
    response = client.delete(f"/api/classes/{school_class['id']}", headers=teacher_headers)
    assert response.status_code == 200
    response = client.get(f"/api/classes/{school_class['id']}", headers=teacher_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Class not found"


def test_naive_times_are_normalised_to_utc():
    school_class = ClassCreate(
        subject="Physics", start_time="2030-03-01T09:00:00", end_time="2030-03-01T10:00:00"
    )
    assert school_class.start_time == datetime(2030, 3, 1, 9, tzinfo=timezone.utc)
    assert school_class.end_time.tzinfo == timezone.utc

    update = ClassUpdate(end_time="2030-03-01T11:30:00")
    assert update.end_time == datetime(2030, 3, 1, 11, 30, tzinfo=timezone.utc)
    assert update.start_time is None


def test_offset_times_are_kept_as_given():
    school_class = ClassCreate(
        subject="Physics",
        start_time="2030-03-01T09:00:00+02:00",
        end_time="2030-03-01T10:00:00+02:00",
    )
    assert school_class.start_time == datetime(2030, 3, 1, 7, tzinfo=timezone.utc)


def test_naive_schedule_is_stored_as_utc(client, db, teacher_headers):
    created = schedule(
        client,
        teacher_headers,
        start_time="2030-03-01T09:00:00",
        end_time="2030-03-01T10:00:00",
    ).json()["data"]

    db.expire_all()
    stored = db.query(SchoolClass).filter(SchoolClass.id == uuid.UUID(created["id"])).one()
    assert as_utc(stored.start_time) == datetime(2030, 3, 1, 9, tzinfo=timezone.utc)
