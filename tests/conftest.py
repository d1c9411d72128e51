# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from contextlib import nullcontext

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from noteboard.api.v1.dependencies import get_mailer
from noteboard.core.security import Identity, create_access_token, hash_password
from noteboard.db.session import Base
from noteboard.db.session import get_db as app_get_session
from noteboard.db.session import get_session_factory as app_get_session_factory
from noteboard.main import app as fastapi_app
from noteboard.models import Post, PostKind, Reply, User
from noteboard.services.mailer import Mailer

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "Secret1!"


class RecordingMailer(Mailer):
    """Mailer that keeps sent messages in memory."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []

    def send(self, to: str, subject: str, body: str) -> None:
        self.sent.append({"to": to, "subject": subject, "body": body})


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture(autouse=True)
def override_dependencies(app: FastAPI, db_session: Session, mailer: RecordingMailer) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    # Background fan-out reuses the test session instead of opening its own.
    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[app_get_session_factory] = lambda: lambda: nullcontext(db_session)
    app.dependency_overrides[get_mailer] = lambda: mailer
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with a known password."""

    def _make_user(username: str, roles: list[str] | None = None, active: bool = True) -> User:
        user = User(
            username=username,
            email=f"{username}@noteboard.io",
            password_hash=hash_password(TEST_PASSWORD),
            roles=roles or ["Member"],
            active=active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol", roles=["Admin"])


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, username=user.username, roles=tuple(user.roles))


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.username, list(user.roles))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def as_identity() -> Callable[[User], Identity]:
    """Return a helper turning a persisted user into a caller identity."""
    return identity_of


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""
    return auth_headers


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    """Return authorization headers for alice."""
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    """Return authorization headers for bob."""
    return auth_headers(bob)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with increasing tickets."""
    tickets = iter(range(500, 10_000))

    def _make_post(owner: User, title: str, kind: PostKind = PostKind.FORUM, text: str = "Body") -> Post:
        post = Post(
            kind=kind.value,
            owner_id=owner.id,
            title=title,
            text=text,
            completed=False,
            ticket=next(tickets),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def make_reply(db_session: Session) -> Callable[..., Reply]:
    """Return a factory persisting replies without notification fan-out."""

    def _make_reply(post: Post, author: User, text: str = "A reply") -> Reply:
        reply = Reply(post_id=post.id, author_id=author.id, text=text)
        db_session.add(reply)
        db_session.commit()
        db_session.refresh(reply)
        return reply

    return _make_reply
