"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Database
from main import create_app
from notifier import EmailNotifier

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"


class StubResponse:
    def __init__(self, status_code: int = 201, text: str = '{"messageId": "abc"}'):
        self.status_code = status_code
        self.text = text


class StubSession:
    """Stands in for requests.Session; records calls, optionally fails."""

    def __init__(self, response: StubResponse = None, error: Exception = None):
        self.response = response or StubResponse()
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def respond_with(self, status_code: int, text: str = "") -> None:
        self.response = StubResponse(status_code, text)


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        admin_username=ADMIN_USERNAME,
        admin_email="admin@example.com",
        admin_password=ADMIN_PASSWORD,
        email_api_key="test-api-key",
        email_recipient="owner@example.com",
        email_sender="no-reply@example.com",
        log_level="WARNING",
    )


@pytest.fixture
def database() -> Database:
    db = Database("sqlite://", clock=TickingClock())
    yield db
    db.dispose()


@pytest.fixture
def email_session() -> StubSession:
    return StubSession()


@pytest.fixture
def notifier(settings, email_session) -> EmailNotifier:
    return EmailNotifier.from_settings(settings, session=email_session)


@pytest.fixture
def app(settings, database, notifier):
    return create_app(settings=settings, database=database, notifier=notifier)


@pytest.fixture
def client(app):
    """Client with the app lifespan run (tables created, admin seeded)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client, admin_credentials) -> str:
    response = client.post("/api/auth/login", json=admin_credentials)
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def admin_credentials() -> Dict[str, str]:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture
def contact_payload() -> Dict[str, Any]:
    return {"sender_name": "Jane", "sender_email": "jane@x.com", "message": "Hi"}
