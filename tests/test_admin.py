def test_admin_routes_require_admin(client, user_headers):
    assert client.get("/api/v1/admin/signup-requests", headers=user_headers).status_code == 403
    assert client.get("/api/v1/admin/users").status_code in (401, 403)


def test_list_signup_requests(client, admin_headers):
    response = client.get("/api/v1/admin/signup-requests", headers=admin_headers)
    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert emails == {"pending@example.com", "pending1@example.com", "pending2@example.com"}


def test_approve_removes_from_pending(client, admin_headers):
    response = client.post("/api/v1/admin/signup-requests/3/approve", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    pending = client.get("/api/v1/admin/signup-requests", headers=admin_headers).json()
    assert "3" not in {u["id"] for u in pending}


def test_reject_then_login_shows_rejection(client, admin_headers):
    assert client.post("/api/v1/admin/signup-requests/3/reject", headers=admin_headers).status_code == 200
    login = client.post("/api/v1/auth/login", json={"email": "pending@example.com", "password": "password"})
    assert login.status_code == 403
    assert login.json()["detail"] == "Your account has been rejected"


def test_approve_unknown_user(client, admin_headers):
    response = client.post("/api/v1/admin/signup-requests/nope/approve", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_bulk_approve_reports_failures(client, admin_headers):
    pending = client.get("/api/v1/admin/signup-requests", headers=admin_headers).json()
    ids = [u["id"] for u in pending]
    response = client.post(
        "/api/v1/admin/signup-requests/bulk-approve",
        headers=admin_headers,
        json={"user_ids": ids + ["ghost", ids[0]]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["processed"] == ids
    assert body["failed"] == ["ghost"]
    assert client.get("/api/v1/admin/signup-requests", headers=admin_headers).json() == []


def test_bulk_reject(client, admin_headers):
    response = client.post(
        "/api/v1/admin/signup-requests/bulk-reject",
        headers=admin_headers,
        json={"user_ids": ["3"]},
    )
    assert response.json() == {"processed": ["3"], "failed": []}


def test_bulk_requires_ids(client, admin_headers):
    response = client.post(
        "/api/v1/admin/signup-requests/bulk-reject", headers=admin_headers, json={"user_ids": []}
    )
    assert response.status_code == 422


def test_list_users_with_filters(client, admin_headers):
    all_users = client.get("/api/v1/admin/users", headers=admin_headers).json()
    assert len(all_users) == 6

    approved = client.get("/api/v1/admin/users", params={"status": "approved"}, headers=admin_headers).json()
    assert {u["status"] for u in approved} == {"approved"}

    search = client.get("/api/v1/admin/users", params={"search": "JANE"}, headers=admin_headers).json()
    assert [u["email"] for u in search] == ["janedoe@example.com"]

    bad = client.get("/api/v1/admin/users", params={"role": "Overlord"}, headers=admin_headers)
    assert bad.status_code == 422


def test_change_role(client, admin_headers):
    response = client.patch("/api/v1/admin/users/1/role", headers=admin_headers, json={"role": "Moderator"})
    assert response.status_code == 200
    assert response.json()["role"] == "Moderator"
    assert client.patch(
        "/api/v1/admin/users/1/role", headers=admin_headers, json={"role": "Admin"}
    ).status_code == 422


def test_toggle_suspension_blocks_login(client, admin_headers):
    client.post("/api/v1/admin/users/1/toggle-suspension", headers=admin_headers)
    login = client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "password"})
    assert login.status_code == 403
    assert login.json()["detail"] == "Your account has been suspended"

    restored = client.post("/api/v1/admin/users/1/toggle-suspension", headers=admin_headers)
    assert restored.json()["status"] == "approved"


def test_stats(client, admin_headers):
    client.post("/api/v1/admin/signup-requests/3/reject", headers=admin_headers)
    body = client.get("/api/v1/admin/stats", headers=admin_headers).json()
    assert body["total_users"] == 6
    assert body["pending_users"] == 2
    assert body["rejected_users"] == 1
    assert body["content"] == {"ideas": 5, "projects": 3, "talks": 4}
