from datetime import timedelta

from conftest import auth_headers, login
from skills_hub.core import security
from skills_hub.core.config import settings


def test_demo_login_returns_token_and_user(client):
    data = login(client, "admin", "admin")
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "admin@school.com"
    assert data["user"]["role"] == "admin"

    payload = security.decode_access_token(data["token"])
    assert payload["sub"] == data["user"]["id"]
    assert payload["role"] == "admin"
    assert payload["type"] == "access"


def test_login_with_seeded_password(client):
    data = login(client, "Teacher@School.com", "teacher123")
    assert data["user"]["role"] == "teacher"
    assert data["user"]["subject"] == "Mathematics"
    assert data["user"]["teacher_id"]


def test_invalid_credentials(client):
    response = client.post(
        "/api/auth/login", json={"email": "admin@school.com", "password": "wrong"}
    )
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Invalid credentials"
    assert body["statusCode"] == 401
    assert body["path"] == "/api/auth/login"


def test_demo_shortcut_needs_matching_password(client):
    response = client.post("/api/auth/login", json={"email": "admin", "password": "teacher"})
    assert response.status_code == 401


def test_missing_fields_are_bad_request(client):
    response = client.post("/api/auth/login", json={"email": "admin@school.com"})
    assert response.status_code == 400
    assert "password" in response.json()["error"]


def test_account_locks_after_repeated_failures(client):
    for _ in range(settings.MAX_FAILED_LOGINS - 1):
        response = client.post(
            "/api/auth/login", json={"email": "parent@school.com", "password": "nope"}
        )
        assert response.status_code == 401

    response = client.post(
        "/api/auth/login", json={"email": "parent@school.com", "password": "nope"}
    )
    assert response.status_code == 403
    assert "locked" in response.json()["error"]

    # Even the right password is refused while locked
    response = client.post(
        "/api/auth/login", json={"email": "parent@school.com", "password": "parent123"}
    )
    assert response.status_code == 403


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")
    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


def test_profile_rejects_garbage_token(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403
    assert response.json()["error"] == "Invalid token"


def test_profile_rejects_expired_token(client, db):
    from skills_hub.models import User

    admin = db.query(User).filter(User.email == "admin@school.com").one()
    token = security.create_access_token(admin.id, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Token expired"


def test_profile_returns_current_user(client, student_headers):
    response = client.get("/api/auth/profile", headers=student_headers)
    assert response.status_code == 200
    user = response.json()["data"]
    assert user["email"] == "student@school.com"
    assert user["grade"] == "10th Grade"
    assert user["parent_id"]


def test_admin_registers_teacher_with_profile(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Alan Turing",
            "email": "alan@school.com",
            "password": "enigma42",
            "role": "teacher",
            "subject": "Computer Science",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    user = response.json()["data"]
    assert user["role"] == "teacher"
    assert user["subject"] == "Computer Science"
    assert user["teacher_id"]

    assert login(client, "alan@school.com", "enigma42")["user"]["id"] == user["id"]


def test_register_duplicate_email_conflicts(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Someone",
            "email": "teacher@school.com",
            "password": "secret1",
            "role": "teacher",
        },
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "User already exists"


def test_register_with_unknown_parent(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Orphan Kid",
            "email": "kid@school.com",
            "password": "secret1",
            "role": "student",
            "parent_id": "00000000-0000-0000-0000-000000000000",
        },
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Parent not found"


def test_register_is_admin_only(client, teacher_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "Eve", "email": "eve@school.com", "password": "secret1", "role": "parent"},
        headers=teacher_headers,
    )
    assert response.status_code == 403


def test_register_rejects_bad_role(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "Boss", "email": "boss@school.com", "password": "secret1", "role": "admin"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_change_password(client):
    headers = auth_headers(client, "student@school.com", "student123")

    response = client.put(
        "/api/auth/change-password",
        json={"current_password": "wrong-one", "new_password": "newpass1"},
        headers=headers,
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Current password is incorrect"

    response = client.put(
        "/api/auth/change-password",
        json={"current_password": "student123", "new_password": "newpass1"},
        headers=headers,
    )
    assert response.status_code == 200
    assert login(client, "student@school.com", "newpass1")["user"]["role"] == "student"
