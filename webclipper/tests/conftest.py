from __future__ import annotations

import os

os.environ.setdefault("ENABLE_RATE_LIMIT", "false")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Iterator  # noqa: E402
from dataclasses import replace  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402

from webclipper.application.interfaces import GitHubIdentity  # noqa: E402
from webclipper.domain import (  # noqa: E402
    OAuthError,
    Session,
    SessionId,
    StorageError,
    User,
    UserConflictError,
    UserId,
)
from webclipper.domain.users.repositories import PasswordDigest  # noqa: E402
from webclipper.shared.config import AppConfig, load_config  # noqa: E402
from webclipper.shared.config.settings import (  # noqa: E402
    DatabaseConfig,
    GitHubConfig,
    SecurityConfig,
)
from webclipper.shared.result import Err, Ok, Result  # noqa: E402


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StorageError(RuntimeError("users table unavailable"))

    def find_by_id(self, user_id: UserId) -> User | None:
        self._check()
        return self.users.get(user_id.value)

    def find_by_username(self, username: str) -> User | None:
        self._check()
        return next((u for u in self.users.values() if u.username == username), None)

    def find_by_github_id(self, github_id: str) -> User | None:
        self._check()
        return next((u for u in self.users.values() if u.github_id == github_id), None)

    def find_first(self) -> User | None:
        self._check()
        ordered = sorted(self.users.values(), key=lambda u: u.created_at)
        return ordered[0] if ordered else None

    def save(self, user: User) -> User:
        self._check()
        for other in self.users.values():
            if other.id != user.id:
                raise UserConflictError(RuntimeError("users table already has a row"))
        self.users[user.id.value] = user
        return user

    def count(self) -> int:
        self._check()
        return len(self.users)


class InMemorySessionRepository:
    def __init__(self) -> None:
        self.sessions: dict[str, Session] = {}
        self.fail = False
        self.fail_delete_expired = False

    def _check(self) -> None:
        if self.fail:
            raise StorageError(RuntimeError("sessions table unavailable"))

    def find_by_id(self, session_id: SessionId) -> Session | None:
        self._check()
        return self.sessions.get(session_id.value)

    def save(self, session: Session) -> Session:
        self._check()
        if session.id.value in self.sessions:
            raise StorageError(RuntimeError("duplicate session id"))
        self.sessions[session.id.value] = session
        return session

    def delete_by_id(self, session_id: SessionId) -> None:
        self._check()
        self.sessions.pop(session_id.value, None)

    def delete_expired(self) -> int:
        self._check()
        if self.fail_delete_expired:
            raise StorageError(RuntimeError("cleanup failed"))
        now = datetime.now(UTC)
        expired = [key for key, s in self.sessions.items() if s.expires_at <= now]
        for key in expired:
            del self.sessions[key]
        return len(expired)


class DeterministicHasher:
    def hash(self, password: str) -> Result[PasswordDigest]:
        return Ok(PasswordDigest(hash=f"hashed:{password}", salt="c2FsdA=="))

    def verify(self, password: str, hashed: str, salt: str) -> Result[bool]:
        return Ok(hashed == f"hashed:{password}")


class FailingHasher:
    def hash(self, password: str) -> Result[PasswordDigest]:
        return Err(StorageError(RuntimeError("crypto unavailable")))

    def verify(self, password: str, hashed: str, salt: str) -> Result[bool]:
        return Err(StorageError(RuntimeError("crypto unavailable")))


class FakeGitHub:
    def __init__(self, identity: GitHubIdentity | None = None) -> None:
        self.identity = identity or GitHubIdentity(id="4242", login="octocat")
        self.fail_exchange = False
        self.exchanged: list[str] = []

    def authorize_url(self, *, state: str, redirect_uri: str) -> str:
        return f"https://github.com/login/oauth/authorize?state={state}&redirect_uri={redirect_uri}"

    def exchange_code(self, code: str) -> str:
        self.exchanged.append(code)
        if self.fail_exchange:
            raise OAuthError("Failed to get access token")
        return "gho_test_token"

    def fetch_user(self, access_token: str) -> GitHubIdentity:
        return self.identity


def make_user(
    username: str = "alice",
    *,
    password: str = "secret123",
    github_id: str | None = None,
) -> User:
    return User.create(
        id=UserId.generate(),
        username=username,
        password_hash=f"hashed:{password}",
        password_salt="c2FsdA==",
        github_id=github_id,
    )


def expire(session: Session) -> Session:
    return replace(session, expires_at=datetime.now(UTC))


@pytest.fixture(autouse=True)
def _fresh_config() -> Iterator[None]:
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'webclipper.db'}"


@pytest.fixture()
def app_config(database_url: str) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(url=database_url),
        security=SecurityConfig(
            allowed_origins=["https://clip.example.com"],
            enable_rate_limit=False,
        ),
        github=GitHubConfig(client_id="client-id", client_secret="client-secret"),
    )


@pytest.fixture()
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture()
def app(app_config: AppConfig, github: FakeGitHub) -> Iterator[Flask]:
    from webclipper.app import create_app
    from webclipper.infrastructure.container import Container

    container = Container(app_config, github=github)
    flask_app = create_app(container)
    flask_app.config.update(TESTING=True)
    yield flask_app
    container.engine.dispose()
