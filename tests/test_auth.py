from salon import config


def test_register_then_login(client):
    registered = client.post(
        "/api/register",
        json={"username": "owner", "password": "owner-pass", "name": "Owner", "email": "owner@salon.com"},
    )
    assert registered.status_code == 201
    assert registered.json()["user"]["role"] == "admin"
    assert registered.json()["tokenType"] == "bearer"

    logged_in = client.post("/api/login", json={"username": "owner", "password": "owner-pass"})
    assert logged_in.status_code == 200
    token = logged_in.json()["accessToken"]

    me = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "owner"


def test_register_rejects_taken_username(client, admin):
    response = client.post(
        "/api/register", json={"username": "admin", "password": "whatever", "name": "Someone"}
    )
    assert response.status_code == 400


def test_registration_can_be_disabled(client, monkeypatch):
    monkeypatch.setattr("salon.routes.auth.ALLOW_REGISTRATION", False)
    response = client.post("/api/register", json={"username": "owner", "password": "owner-pass", "name": "O"})
    assert response.status_code == 403


def test_login_with_wrong_password(client, admin):
    response = client.post("/api/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401


def test_login_is_rate_limited(client, admin, monkeypatch):
    from salon import rate_limiter

    monkeypatch.setattr(config, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: None)
    monkeypatch.setattr(rate_limiter, "memory_cache", {})

    statuses = [
        client.post("/api/login", json={"username": "admin", "password": "wrong"}).status_code
        for _ in range(11)
    ]

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


def test_admin_permissions_map(client, headers):
    held = client.get("/api/user/permissions", headers=headers).json()
    assert all(held.values())
    assert "manage_professionals" in held


def test_health_and_security_headers(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
