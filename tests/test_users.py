from conftest import login


def test_list_users_is_admin_only(client, admin_headers, teacher_headers):
    response = client.get("/api/users", headers=teacher_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Insufficient permissions"

    response = client.get("/api/users", headers=admin_headers)
    assert response.status_code == 200
    emails = {u["email"] for u in response.json()["data"]}
    assert {"admin@school.com", "teacher@school.com", "hr@school.com"} <= emails


def test_user_can_read_self_but_not_others(client, teacher_headers):
    me = login(client, "teacher", "teacher")["user"]
    other = login(client, "student", "student")["user"]

    assert client.get(f"/api/users/{me['id']}", headers=teacher_headers).status_code == 200
    response = client.get(f"/api/users/{other['id']}", headers=teacher_headers)
    assert response.status_code == 403


def test_unknown_user(client, admin_headers):
    response = client.get(
        "/api/users/00000000-0000-0000-0000-000000000000", headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_update_profile_fields(client, parent_headers):
    me = login(client, "parent", "parent")["user"]
    response = client.put(
        f"/api/users/{me['id']}",
        json={"name": "Mary Jones", "phone": "+1999", "address": "9 Elm Road"},
        headers=parent_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Mary Jones"
    assert data["phone"] == "+1999"
    assert data["address"] == "9 Elm Road"


def test_update_to_taken_email_conflicts(client, admin_headers):
    teacher = login(client, "teacher", "teacher")["user"]
    response = client.put(
        f"/api/users/{teacher['id']}",
        json={"email": "student@school.com"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "Resource already exists"


def test_admin_deletes_user_and_profile(client, admin_headers):
    student = login(client, "student", "student")["user"]
    response = client.delete(f"/api/users/{student['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = client.get(f"/api/users/{student['id']}", headers=admin_headers)
    assert response.status_code == 404


def test_delete_is_admin_only(client, teacher_headers):
    student = login(client, "student", "student")["user"]
    response = client.delete(f"/api/users/{student['id']}", headers=teacher_headers)
    assert response.status_code == 403
