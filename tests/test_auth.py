import pytest

from app.config.settings import Settings, settings
from app.core.rate_limit import limiter


SIGNUP_PAYLOAD = {
    "email": "builder@example.com",
    "password": "buildit1",
    "full_name": "Bea Builder",
    "age": 27,
    "gender": "Female",
    "department": "Engineering",
    "education_level": "Bachelor",
    "github_url": "https://github.com/bea",
    "linkedin_url": "https://linkedin.com/in/bea",
}


def test_signup_creates_pending_request(client):
    response = client.post("/api/v1/auth/signup", json=SIGNUP_PAYLOAD)
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "builder@example.com"
    assert body["status"] == "pending"
    assert "admin will review" in body["message"]


def test_signup_duplicate_email_is_rejected(client):
    assert client.post("/api/v1/auth/signup", json=SIGNUP_PAYLOAD).status_code == 201
    response = client.post("/api/v1/auth/signup", json={**SIGNUP_PAYLOAD, "email": "Builder@Example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.parametrize("override", [
    {"email": "not-an-email"},
    {"password": "123"},
    {"age": 5},
    {"github_url": "github"},
])
def test_signup_validation(client, override):
    response = client.post("/api/v1/auth/signup", json={**SIGNUP_PAYLOAD, **override})
    assert response.status_code == 422


def test_login_approved_user(client):
    response = client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "password"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["kind"] == "user"
    assert body["principal_id"] == "1"
    assert body["access_token"]


def test_login_bad_credentials(client):
    response = client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_pending_user_gets_status_message(client):
    response = client.post("/api/v1/auth/login", json={"email": "pending@example.com", "password": "password"})
    assert response.status_code == 403
    assert response.json()["detail"] == "Your account is pending approval"


def test_freshly_signed_up_user_cannot_login_until_approved(client, admin_headers):
    user_id = client.post("/api/v1/auth/signup", json=SIGNUP_PAYLOAD).json()["user_id"]
    credentials = {"email": SIGNUP_PAYLOAD["email"], "password": SIGNUP_PAYLOAD["password"]}

    assert client.post("/api/v1/auth/login", json=credentials).status_code == 403
    approve = client.post(f"/api/v1/admin/signup-requests/{user_id}/approve", headers=admin_headers)
    assert approve.status_code == 200
    assert client.post("/api/v1/auth/login", json=credentials).status_code == 200


def test_admin_login(client):
    response = client.post("/api/v1/auth/admin/login", json={"email": "admin@example.com", "password": "admin"})
    assert response.status_code == 200
    assert response.json()["kind"] == "admin"

    bad = client.post("/api/v1/auth/admin/login", json={"email": "admin@example.com", "password": "x"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid admin credentials"


def test_me_for_user(client, user_headers):
    response = client.get("/api/v1/auth/me", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "user"
    assert body["principal"]["email"] == "user@example.com"
    assert body["is_authenticated"] is True
    assert body["is_admin_authenticated"] is False


def test_me_for_admin(client, admin_headers):
    body = client.get("/api/v1/auth/me", headers=admin_headers).json()
    assert body["kind"] == "admin"
    assert body["is_authenticated"] is False
    assert body["is_admin_authenticated"] is True


def test_me_requires_token(client):
    assert client.get("/api/v1/auth/me").status_code in (401, 403)
    bad = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer bogus"})
    assert bad.status_code == 401


def test_logout_invalidates_session(client, user_headers):
    response = client.post("/api/v1/auth/logout", headers=user_headers)
    assert response.status_code == 200
    assert client.get("/api/v1/auth/me", headers=user_headers).status_code == 401


def test_logout_without_token_still_succeeds(client):
    response = client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}


def test_logout_with_unknown_token_still_succeeds(client):
    response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer gone"})
    assert response.status_code == 200


def test_me_principal_shapes(client, user_headers, admin_headers):
    user = client.get("/api/v1/auth/me", headers=user_headers).json()["principal"]
    assert user["status"] == "approved"
    assert user["role"] == "Member"

    admin = client.get("/api/v1/auth/me", headers=admin_headers).json()["principal"]
    assert admin["role"] == "Admin"
    assert admin["email"] == "admin@example.com"
    assert "status" not in admin


@pytest.fixture
def tight_login_limit(monkeypatch):
    monkeypatch.setattr(settings, "login_rate_limit", "2/minute")
    limiter.reset()
    yield
    limiter.reset()


def test_login_rate_limit_returns_429(client, tight_login_limit):
    payload = {"email": "user@example.com", "password": "password"}
    for _ in range(2):
        assert client.post("/api/v1/auth/login", json=payload).status_code == 200
    assert client.post("/api/v1/auth/login", json=payload).status_code == 429


def test_login_rate_limit_leaves_other_routes_alone(client, tight_login_limit, user_headers):
    for _ in range(5):
        assert client.get("/api/v1/auth/me", headers=user_headers).status_code == 200
    assert "rate_limit" not in Settings.model_fields
