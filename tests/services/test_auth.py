# tests/services/test_auth.py
"""Tests for login, refresh and password reset."""

from __future__ import annotations

from datetime import timedelta

import pytest

from noteboard.core import security
from noteboard.core.errors import Forbidden, Unauthorized, ValidationError
from noteboard.core.settings import settings
from noteboard.db.time import utcnow
from noteboard.services.auth import AuthService, MailError
from noteboard.services.mailer import MailDeliveryError, Mailer


class FailingMailer(Mailer):
    def send(self, to: str, subject: str, body: str) -> None:
        raise MailDeliveryError("relay unreachable")


def test_login_by_username_or_email(db_session, alice) -> None:
    service = AuthService(db_session, settings)

    by_name = service.login("alice", "Secret1!")
    by_email = service.login("alice@noteboard.io", "Secret1!")

    claims = security.decode_access_token(by_name.access_token)
    assert claims["sub"] == str(alice.id)
    assert claims["username"] == "alice"
    assert claims["roles"] == ["Member"]
    assert security.decode_refresh_token(by_email.refresh_token)["username"] == "alice"


def test_login_rejections(db_session, make_user) -> None:
    make_user("sleepy", active=False)
    service = AuthService(db_session, settings)

    with pytest.raises(Unauthorized):
        service.login("sleepy", "Secret1!")
    with pytest.raises(Unauthorized):
        service.login("nobody", "Secret1!")


def test_login_wrong_password(db_session, alice) -> None:
    with pytest.raises(Unauthorized):
        AuthService(db_session, settings).login("alice", "wrong")


def test_refresh(db_session, alice) -> None:
    service = AuthService(db_session, settings)
    refresh_token = security.create_refresh_token("alice")

    claims = security.decode_access_token(service.refresh(refresh_token))
    assert claims["username"] == "alice"

    with pytest.raises(Unauthorized):
        service.refresh(None)
    with pytest.raises(Forbidden):
        service.refresh("not-a-token")
    with pytest.raises(Forbidden):
        # Access tokens are signed with a different secret.
        service.refresh(security.create_access_token(alice.id, "alice", ["Member"]))
    with pytest.raises(Unauthorized):
        service.refresh(security.create_refresh_token("ghost"))


def test_expired_refresh_token_is_forbidden(db_session, alice) -> None:
    expired = security.create_refresh_token("alice", expires_delta=timedelta(seconds=-5))
    with pytest.raises(Forbidden):
        AuthService(db_session, settings).refresh(expired)


def test_forgot_password_mails_link(db_session, alice, mailer) -> None:
    AuthService(db_session, settings, mailer).forgot_password("ALICE@noteboard.io")

    db_session.refresh(alice)
    assert alice.reset_token is not None
    assert len(alice.reset_token) == 64
    [sent] = mailer.sent
    assert sent["to"] == "alice@noteboard.io"
    assert f"/reset-password/{alice.reset_token}" in sent["body"]


def test_forgot_password_unknown_email_is_silent(db_session, mailer) -> None:
    AuthService(db_session, settings, mailer).forgot_password("nobody@noteboard.io")
    assert mailer.sent == []


def test_forgot_password_mail_failure(db_session, alice) -> None:
    with pytest.raises(MailError):
        AuthService(db_session, settings, FailingMailer()).forgot_password("alice@noteboard.io")


def test_reset_password(db_session, alice, mailer) -> None:
    service = AuthService(db_session, settings, mailer)
    service.forgot_password("alice@noteboard.io")
    db_session.refresh(alice)
    token = alice.reset_token

    with pytest.raises(ValidationError, match="different"):
        service.reset_password(token, "Secret1!")

    service.reset_password(token, "Fresh2@")
    db_session.refresh(alice)
    assert alice.reset_token is None
    assert alice.reset_token_expiry is None
    assert security.verify_password("Fresh2@", alice.password_hash)

    with pytest.raises(ValidationError, match="Invalid or expired"):
        service.reset_password(token, "Another3")


def test_reset_password_expired_token(db_session, alice) -> None:
    alice.reset_token = "a" * 64
    alice.reset_token_expiry = utcnow() - timedelta(minutes=1)
    db_session.commit()

    with pytest.raises(ValidationError):
        AuthService(db_session, settings).reset_password("a" * 64, "Fresh2@")
