import os

# Configure before anything imports skills_hub.core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEMO_LOGIN_ENABLED"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from skills_hub.core.database import create_db_engine, get_db
from skills_hub.main import app
from skills_hub.models import Base
from skills_hub.services.setup import seed_database


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_database(session)
    yield session
    session.close()


@pytest.fixture
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def auth_headers(client, email, password):
    token = login(client, email, password)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return auth_headers(client, "admin", "admin")


@pytest.fixture
def teacher_headers(client):
    return auth_headers(client, "teacher", "teacher")


@pytest.fixture
def student_headers(client):
    return auth_headers(client, "student", "student")


@pytest.fixture
def parent_headers(client):
    return auth_headers(client, "parent", "parent")


@pytest.fixture
def hr_headers(client):
    return auth_headers(client, "hr", "hr")


@pytest.fixture
def branch_headers(client):
    return auth_headers(client, "branch", "branch")
