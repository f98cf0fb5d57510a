from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace

from fastapi.testclient import TestClient

from app.core.security import create_access_token
from conftest import auth_header


def registration(**overrides: str) -> dict[str, str]:
    payload = {
        "username": "bob",
        "password": "hunter22",
        "email": "bob@example.com",
        "role": "job_seeker",
        "name": "Bob",
    }
    payload.update(overrides)
    return payload


def test_register_returns_user_and_token(client: TestClient) -> None:
    response = client.post("/api/register", json=registration())
    assert response.status_code == 201

    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "bob"
    assert body["user"]["role"] == "job_seeker"
    assert "hashed_password" not in body["user"]
    assert "password" not in body["user"]


def test_register_missing_field_is_rejected(client: TestClient) -> None:
    payload = registration()
    del payload["email"]
    response = client.post("/api/register", json=payload)
    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}


def test_duplicate_username_is_rejected(client: TestClient) -> None:
    assert client.post("/api/register", json=registration()).status_code == 201
    response = client.post("/api/register", json=registration(email="other@example.com"))
    assert response.status_code == 400
    assert response.json()["message"] == "Username already exists"


def test_username_match_is_case_sensitive(client: TestClient) -> None:
    assert client.post("/api/register", json=registration()).status_code == 201
    response = client.post("/api/register", json=registration(username="Bob", email="big.bob@example.com"))
    assert response.status_code == 201


def test_duplicate_email_is_rejected(client: TestClient) -> None:
    assert client.post("/api/register", json=registration()).status_code == 201
    response = client.post("/api/register", json=registration(username="robert"))
    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


def test_unknown_role_is_rejected(client: TestClient) -> None:
    response = client.post("/api/register", json=registration(role="admin"))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid role"


def test_login_with_valid_credentials(client: TestClient, register_user) -> None:
    register_user("carol")
    response = client.post("/api/login", json={"username": "carol", "password": "s3cret-pass"})
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "carol"
    assert response.json()["token"]


def test_login_with_wrong_password_is_unauthorized(client: TestClient, register_user) -> None:
    register_user("carol")
    response = client.post("/api/login", json={"username": "carol", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_login_with_unknown_user_is_unauthorized(client: TestClient) -> None:
    response = client.post("/api/login", json={"username": "nobody", "password": "whatever"})
    assert response.status_code == 401


def test_current_user_requires_header(client: TestClient) -> None:
    response = client.get("/api/user")
    assert response.status_code == 401


def test_current_user_with_invalid_token_is_forbidden(client: TestClient) -> None:
    response = client.get("/api/user", headers=auth_header("garbage"))
    assert response.status_code == 403


def test_current_user_with_expired_token_is_forbidden(client: TestClient) -> None:
    user = SimpleNamespace(id=1, username="old", role="hr")
    token = create_access_token(user, expires_delta=timedelta(seconds=-1))
    response = client.get("/api/user", headers=auth_header(token))
    assert response.status_code == 403


def test_current_user_returns_token_claims(client: TestClient, register_user) -> None:
    token = register_user("dave", role="hr")
    response = client.get("/api/user", headers=auth_header(token))
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "dave"
    assert body["role"] == "hr"


def test_logout_clears_session_but_token_stays_valid(client: TestClient, register_user) -> None:
    token = register_user("erin")
    assert client.get("/api/session").json()["username"] == "erin"

    response = client.post("/api/logout")
    assert response.status_code == 200

    assert client.get("/api/session").status_code == 401
    assert client.get("/api/user", headers=auth_header(token)).status_code == 200


def test_login_replaces_session_user(client: TestClient, register_user) -> None:
    register_user("frank")
    register_user("grace")
    assert client.get("/api/session").json()["username"] == "grace"

    client.post("/api/login", json={"username": "frank", "password": "s3cret-pass"})
    assert client.get("/api/session").json()["username"] == "frank"
