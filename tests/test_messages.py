import pytest

from conftest import login


@pytest.fixture
def ids(client):
    return {
        "teacher": login(client, "teacher", "teacher")["user"]["teacher_id"],
        "parent": login(client, "parent", "parent")["user"]["parent_id"],
    }


def test_teacher_sees_parents_with_children(client, teacher_headers):
    response = client.get("/api/messages/parents", headers=teacher_headers)
    assert response.status_code == 200
    parents = response.json()["data"]
    assert parents[0]["name"] == "Mary Smith"
    assert parents[0]["children"] == ["Jane Smith"]


def test_parent_list_is_for_teachers(client, parent_headers):
    assert client.get("/api/messages/parents", headers=parent_headers).status_code == 403


def test_conversation_between_teacher_and_parent(
    client, teacher_headers, parent_headers, ids
):
    response = client.post(
        "/api/messages",
        json={"parent_id": ids["parent"], "subject": "Progress", "content": "Jane is doing well."},
        headers=teacher_headers,
    )
    assert response.status_code == 201
    sent = response.json()["data"]
    assert sent["sender"] == "teacher"
    assert sent["teacher_id"] == ids["teacher"]
    assert sent["is_read"] is False

    response = client.post(
        "/api/messages",
        json={"teacher_id": ids["teacher"], "subject": "Re: Progress", "content": "Thanks!"},
        headers=parent_headers,
    )
    assert response.json()["data"]["sender"] == "parent"

    for headers in (teacher_headers, parent_headers):
        messages = client.get("/api/messages", headers=headers).json()["data"]
        assert {m["subject"] for m in messages} == {"Progress", "Re: Progress"}


def test_only_recipient_marks_read(client, teacher_headers, parent_headers, ids):
    sent = client.post(
        "/api/messages",
        json={"parent_id": ids["parent"], "subject": "Trip", "content": "Permission slip due."},
        headers=teacher_headers,
    ).json()["data"]

    response = client.patch(f"/api/messages/{sent['id']}/read", headers=teacher_headers)
    assert response.status_code == 404

    response = client.patch(f"/api/messages/{sent['id']}/read", headers=parent_headers)
    assert response.status_code == 200
    assert response.json()["data"]["is_read"] is True


def test_teacher_must_name_a_parent(client, teacher_headers):
    response = client.post(
        "/api/messages",
        json={"subject": "Hello", "content": "Anyone there?"},
        headers=teacher_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "parent_id is required"


def test_unknown_teacher(client, parent_headers):
    response = client.post(
        "/api/messages",
        json={
            "teacher_id": "00000000-0000-0000-0000-000000000000",
            "subject": "Hello",
            "content": "Hi",
        },
        headers=parent_headers,
    )
    assert response.status_code == 404


def test_students_have_no_inbox(client, student_headers):
    response = client.get("/api/messages", headers=student_headers)
    assert response.status_code == 403
