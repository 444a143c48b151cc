from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from skills_hub.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    sqlstate_of,
    translate_error,
)


class FakeDriverError(Exception):
    def __init__(self, pgcode, message="driver error"):
        super().__init__(message)
        self.pgcode = pgcode


def integrity_error(pgcode=None, message="driver error"):
    return IntegrityError("INSERT ...", {}, FakeDriverError(pgcode, message))


def test_unique_violation_maps_to_conflict():
    assert translate_error(integrity_error("23505")) == (409, "Resource already exists")


def test_foreign_key_violation_maps_to_bad_request():
    assert translate_error(integrity_error("23503")) == (400, "Invalid reference")


def test_sqlite_messages_are_recognised():
    exc = integrity_error(message="UNIQUE constraint failed: users.email")
    assert sqlstate_of(exc) == "23505"
    exc = integrity_error(message="FOREIGN KEY constraint failed")
    assert sqlstate_of(exc) == "23503"


def test_other_database_errors_are_internal():
    assert translate_error(integrity_error("23502")) == (500, "Internal Server Error")


def test_application_errors_keep_their_status():
    assert translate_error(ValidationError("bad input")) == (400, "bad input")
    assert translate_error(UnauthorizedError("Token expired")) == (401, "Token expired")
    assert translate_error(ForbiddenError()) == (403, "Insufficient permissions")
    assert translate_error(NotFoundError("User not found")) == (404, "User not found")
    assert translate_error(ConflictError("User already exists")) == (409, "User already exists")


def test_http_exceptions_pass_through():
    assert translate_error(StarletteHTTPException(405, "Method Not Allowed")) == (
        405,
        "Method Not Allowed",
    )


def test_unknown_errors_are_internal():
    assert translate_error(RuntimeError("boom")) == (500, "Internal Server Error")


def test_error_envelope_shape(client):
    response = client.get("/api/users")
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Access token required"
    assert body["statusCode"] == 401
    assert body["path"] == "/api/users"
    assert body["timestamp"].endswith("Z")


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["statusCode"] == 404
