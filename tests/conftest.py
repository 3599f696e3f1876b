"""Shared fixtures: in-memory store, wired app and an authenticated client."""
import pytest
from fastapi.testclient import TestClient

from app.core.auth import TokenService
from app.core.config import Settings
from app.db.database import Database
from app.main import create_app
from app.services.analytics_service import AnalyticsService
from app.services.student_repository import StudentRepository

TEST_SECRET = "test-secret-key-for-the-suite"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret_key=TEST_SECRET,
        admin_username="teacher",
        admin_password="correct-horse",
    )


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.init_schema()
    yield database
    database.dispose()


@pytest.fixture
def repo(db):
    return StudentRepository(db)


@pytest.fixture
def analytics(db):
    return AnalyticsService(db)


@pytest.fixture
def token_service():
    return TokenService(secret_key=TEST_SECRET)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    token = client.app.state.token_service.issue("teacher")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_student():
    """Build a valid student payload; override any field by keyword."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        payload = {
            "name": f"Student {counter['n']}",
            "email": f"student{counter['n']}@school.edu",
            "subject": "Math",
            "grade": 80,
        }
        payload.update(overrides)
        return payload

    return _make
