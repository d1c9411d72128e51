# tests/v1/test_auth.py
"""Tests for authentication endpoints."""

from __future__ import annotations

from fastapi import status

from noteboard.core import security
from noteboard.core.settings import settings


def _login(client, username: str = "alice", password: str = "Secret1!"):
    return client.post("/api/v1/auth", json={"username": username, "password": password})


def test_login_returns_token_and_sets_cookie(client, alice) -> None:
    response = _login(client)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    claims = security.decode_access_token(data["access_token"])
    assert claims["username"] == "alice"

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.refresh_cookie_name}=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


def test_login_failures(client, alice) -> None:
    assert _login(client, password="nope").status_code == status.HTTP_401_UNAUTHORIZED
    assert _login(client, username="nobody").status_code == status.HTTP_401_UNAUTHORIZED
    missing = client.post("/api/v1/auth", json={"username": "alice"})
    assert missing.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_refresh_uses_cookie(client, alice) -> None:
    _login(client)

    response = client.get("/api/v1/auth/refresh")

    assert response.status_code == status.HTTP_200_OK
    claims = security.decode_access_token(response.json()["access_token"])
    assert claims["sub"] == str(alice.id)


def test_refresh_without_cookie(client) -> None:
    assert client.get("/api/v1/auth/refresh").status_code == status.HTTP_401_UNAUTHORIZED


def test_refresh_with_bad_cookie(client) -> None:
    cookie = {"Cookie": f"{settings.refresh_cookie_name}=garbage"}
    assert client.get("/api/v1/auth/refresh", headers=cookie).status_code == status.HTTP_403_FORBIDDEN


def test_logout(client, alice) -> None:
    assert client.post("/api/v1/auth/logout").status_code == status.HTTP_204_NO_CONTENT

    _login(client)
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Cookie cleared"}
    assert client.cookies.get(settings.refresh_cookie_name) is None


def test_forgot_and_reset_password(client, db_session, alice, mailer) -> None:
    reply = "If that email is registered, a reset link has been sent."

    unknown = client.post("/api/v1/auth/forgot-password", json={"email": "ghost@noteboard.io"})
    assert unknown.status_code == status.HTTP_200_OK
    assert unknown.json()["message"] == reply
    assert mailer.sent == []

    known = client.post("/api/v1/auth/forgot-password", json={"email": "alice@noteboard.io"})
    assert known.json()["message"] == reply
    db_session.refresh(alice)
    token = alice.reset_token
    assert token in mailer.sent[0]["body"]

    same = client.post("/api/v1/auth/reset-password", json={"token": token, "password": "Secret1!"})
    assert same.status_code == status.HTTP_400_BAD_REQUEST

    reset = client.post("/api/v1/auth/reset-password", json={"token": token, "password": "Fresh2@"})
    assert reset.status_code == status.HTTP_200_OK
    assert _login(client, password="Fresh2@").status_code == status.HTTP_200_OK

    reused = client.post("/api/v1/auth/reset-password", json={"token": token, "password": "Other3#"})
    assert reused.status_code == status.HTTP_400_BAD_REQUEST
    assert reused.json()["detail"] == "Invalid or expired token"


def test_reset_password_validates_pattern(client) -> None:
    response = client.post("/api/v1/auth/reset-password", json={"token": "t", "password": "no spaces"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
