from fastapi.testclient import TestClient

from app.config.settings import Settings, settings
from app.database.content_store import get_content_store
from app.main import app


def test_health_and_ready(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}
    assert client.get("/").json()["status"] == "healthy"


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_settings_helpers():
    s = Settings(cors_origins=" http://a.test , ,http://b.test", mock_delay_ms=250, environment="production")
    assert s.get_cors_origins_list() == ["http://a.test", "http://b.test"]
    assert s.mock_delay_seconds == 0.25
    assert s.is_production
    assert Settings(mock_delay_ms=-5).mock_delay_seconds == 0.0


def test_production_hides_unhandled_error_details(client, monkeypatch):
    def broken_content_store():
        raise RuntimeError("content backend exploded")

    monkeypatch.setattr(settings, "environment", "production")
    app.dependency_overrides[get_content_store] = broken_content_store
    unsafe_client = TestClient(app, raise_server_exceptions=False)
    token = unsafe_client.post(
        "/api/v1/auth/login", json={"email": "user@example.com", "password": "password"}
    ).json()["access_token"]

    response = unsafe_client.get("/api/v1/ideas", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_development_reports_unhandled_error_message(client, monkeypatch):
    def broken_content_store():
        raise RuntimeError("content backend exploded")

    monkeypatch.setattr(settings, "environment", "development")
    app.dependency_overrides[get_content_store] = broken_content_store
    unsafe_client = TestClient(app, raise_server_exceptions=False)
    token = unsafe_client.post(
        "/api/v1/auth/login", json={"email": "user@example.com", "password": "password"}
    ).json()["access_token"]

    response = unsafe_client.get("/api/v1/ideas", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 500
    assert response.json() == {"detail": "content backend exploded"}
