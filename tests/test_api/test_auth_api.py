"""
Tests for auth endpoints and bearer-token enforcement
"""
from homeplanner.auth import TokenService
from homeplanner.config import get_settings


def test_register_returns_token_and_user(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Anna", "email": "Anna@Example.com", "password": "password123"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "anna@example.com"
    assert "passwordHash" not in body["user"]
    assert TokenService.from_settings(get_settings()).subject(body["token"]) == body["user"]["id"]


def test_register_validation_and_conflict(client, register):
    response = client.post("/api/v1/auth/register", json={"name": "Anna", "email": "a@example.com"})
    assert response.status_code == 400
    assert "message" in response.json()

    register(email="a@example.com")
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Other", "email": "a@example.com", "password": "password456"},
    )
    assert response.status_code == 409
    assert response.json() == {"message": "Email already in use."}


def test_login_token_subject_is_user_id(client, register):
    _, user = register(email="anna@example.com", password="password123")
    response = client.post("/api/v1/auth/login", json={"email": "anna@example.com", "password": "password123"})
    assert response.status_code == 200
    token = response.json()["token"]
    assert TokenService.from_settings(get_settings()).subject(token) == user["id"]


def test_login_wrong_password(client, register):
    register(email="anna@example.com")
    response = client.post("/api/v1/auth/login", json={"email": "anna@example.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password."}


def test_me(client, register):
    headers, user = register()
    response = client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"id": user["id"], "name": "Anna", "email": "anna@example.com"}


def test_protected_routes_require_token(client):
    for path in ("/api/v1/auth/me", "/api/v1/profiles", "/api/v1/finances", "/api/v1/scenarios"):
        response = client.get(path)
        assert response.status_code == 401, path
        assert response.json() == {"message": "Unauthorized."}


def test_garbage_and_foreign_tokens_rejected(client, register):
    _, user = register()
    forged = TokenService("not-the-server-secret-but-long-enough").issue(user["id"], user["email"])
    for token in ("garbage", forged):
        response = client.get("/api/v1/profiles", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
