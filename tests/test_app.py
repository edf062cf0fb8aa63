"""
Tests for main.py, config.py and errors.py - app wiring, health and error mapping.
"""

from fastapi.testclient import TestClient

from config import Settings
from database import Database
from main import create_app


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json() == {"status": "ok", "service": "portfolio-api"}

    def test_health_reports_database_and_email(self, client):
        body = client.get("/api/health").json()
        assert body["database"] == "connected"
        assert body["email"] == "configured"
        assert body["status"] == "ok"

    def test_unknown_route(self, client):
        assert client.get("/api/unknown").status_code == 404


class TestStoreFailures:
    def test_store_error_becomes_500_with_raw_text(self, settings, notifier):
        # lifespan is not run, so no tables exist
        app = create_app(settings=settings, database=Database("sqlite://"), notifier=notifier)
        client = TestClient(app)

        response = client.get("/api/projects")

        assert response.status_code == 500
        assert "no such table" in response.json()["error"]

    def test_health_degraded_when_database_fails(self, settings, notifier):
        database = Database("sqlite:////nonexistent-dir/portfolio.db")
        app = create_app(settings=settings, database=database, notifier=notifier)

        body = TestClient(app).get("/api/health").json()

        assert body["status"] == "degraded"
        assert body["database"].startswith("error")


class TestSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp.db")
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
        monkeypatch.setenv("FRONTEND_URL", "http://a.dev, http://b.dev")
        monkeypatch.setenv("EMAIL_API_KEY", "key")
        monkeypatch.setenv("EMAIL_RECIPIENT", "owner@x.com")

        settings = Settings.from_env()

        assert settings.database_url == "sqlite:///tmp.db"
        assert settings.jwt_secret == "from-env"
        assert settings.access_token_expire_minutes == 30
        assert settings.cors_origins == ["http://a.dev", "http://b.dev"]
        assert settings.email_configured is True

    def test_defaults(self, monkeypatch):
        for name in ("FRONTEND_URL", "EMAIL_API_KEY", "EMAIL_RECIPIENT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.cors_origins == ["*"]
        assert settings.email_configured is False
