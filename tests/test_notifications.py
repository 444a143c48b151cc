from conftest import login


def send(client, headers, **payload):
    body = {"title": "Heads up", "message": "School closes early on Friday"}
    body.update(payload)
    return client.post("/api/notifications", json=body, headers=headers)


def test_admin_notifies_single_user(client, admin_headers, student_headers):
    student = login(client, "student", "student")["user"]
    response = send(client, admin_headers, user_id=student["id"], priority="high")
    assert response.status_code == 201
    assert len(response.json()["data"]) == 1

    notifications = client.get("/api/notifications", headers=student_headers).json()["data"]
    assert notifications[0]["title"] == "Heads up"
    assert notifications[0]["priority"] == "high"
    assert notifications[0]["type"] == "system"


def test_broadcast_to_role(client, admin_headers, teacher_headers, parent_headers):
    response = send(client, admin_headers, role="teacher", type="class")
    assert response.status_code == 201

    assert len(client.get("/api/notifications", headers=teacher_headers).json()["data"]) == 1
    assert client.get("/api/notifications", headers=parent_headers).json()["data"] == []


def test_target_is_required(client, admin_headers):
    assert send(client, admin_headers).status_code == 400
    assert send(client, admin_headers, role="janitor").status_code == 400


def test_only_admin_sends(client, teacher_headers):
    assert send(client, teacher_headers, role="student").status_code == 403


def test_filters_and_read_state(client, admin_headers, student_headers):
    send(client, admin_headers, role="student", type="reminder", title="Reminder")
    send(client, admin_headers, role="student", title="System")

    def titles(query=""):
        response = client.get(f"/api/notifications{query}", headers=student_headers)
        return sorted(n["title"] for n in response.json()["data"])

    assert titles("?type=reminder") == ["Reminder"]

    reminder = client.get(
        "/api/notifications?type=reminder", headers=student_headers
    ).json()["data"][0]
    response = client.patch(f"/api/notifications/{reminder['id']}/read", headers=student_headers)
    assert response.json()["data"]["is_read"] is True
    assert titles("?unread_only=true") == ["System"]

    response = client.post("/api/notifications/read-all", headers=student_headers)
    assert response.json()["data"]["updated"] == 1
    assert titles("?unread_only=true") == []


def test_cannot_touch_someone_elses_notification(client, admin_headers, teacher_headers):
    created = send(client, admin_headers, role="student").json()["data"][0]
    response = client.delete(f"/api/notifications/{created['id']}", headers=teacher_headers)
    assert response.status_code == 404


def test_delete_own_notification(client, admin_headers, student_headers):
    created = send(client, admin_headers, role="student").json()["data"][0]
    response = client.delete(f"/api/notifications/{created['id']}", headers=student_headers)
    assert response.status_code == 200
    assert client.get("/api/notifications", headers=student_headers).json()["data"] == []
