# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from webclipper.domain import (
    Session,
    SessionId,
    StorageError,
    User,
    UserConflictError,
    UserId,
)
from webclipper.domain.users.repositories import SessionRepository, UserRepository
from webclipper.infrastructure.db.models import SessionRow, UserRow
from webclipper.infrastructure.db.session import SessionFactory, session_scope


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _user_to_domain(row: UserRow) -> User:
    return User(
        id=UserId(row.id),
        username=row.username,
        password_hash=row.password_hash,
        password_salt=row.password_salt,
        github_id=row.github_id,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _session_to_domain(row: SessionRow) -> Session:
    return Session(
        id=SessionId(row.id),
        user_id=UserId(row.user_id),
        expires_at=_as_utc(row.expires_at),
        created_at=_as_utc(row.created_at),
    )


@contextmanager
def _storage_scope(
    factory: SessionFactory,
    *,
    conflict: type[StorageError] = StorageError,
) -> Iterator[DbSession]:
    try:
        with session_scope(factory) as session:
            yield session
    except IntegrityError as exc:
        raise conflict(exc) from exc
    except SQLAlchemyError as exc:
        raise StorageError(exc) from exc


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_id(self, user_id: UserId) -> User | None:
        with _storage_scope(self._session_factory) as session:
            row = session.get(UserRow, user_id.value)
            return _user_to_domain(row) if row else None

    def find_by_username(self, username: str) -> User | None:
        with _storage_scope(self._session_factory) as session:
            row = session.scalars(select(UserRow).where(UserRow.username == username)).first()
            return _user_to_domain(row) if row else None

    def find_by_github_id(self, github_id: str) -> User | None:
        with _storage_scope(self._session_factory) as session:
            row = session.scalars(select(UserRow).where(UserRow.github_id == github_id)).first()
            return _user_to_domain(row) if row else None

    def find_first(self) -> User | None:
        with _storage_scope(self._session_factory) as session:
            row = session.scalars(select(UserRow).order_by(UserRow.created_at).limit(1)).first()
            return _user_to_domain(row) if row else None

    def save(self, user: User) -> User:
        with _storage_scope(self._session_factory, conflict=UserConflictError) as session:
            row = session.get(UserRow, user.id.value)
            if row is None:
                row = UserRow(id=user.id.value, created_at=user.created_at)
                session.add(row)
            row.username = user.username
            row.password_hash = user.password_hash
            row.password_salt = user.password_salt
            row.github_id = user.github_id
            row.updated_at = user.updated_at
        return user

    def count(self) -> int:
        with _storage_scope(self._session_factory) as session:
            return int(session.scalar(select(func.count()).select_from(UserRow)) or 0)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_id(self, session_id: SessionId) -> Session | None:
        with _storage_scope(self._session_factory) as session:
            row = session.get(SessionRow, session_id.value)
            return _session_to_domain(row) if row else None

    def save(self, session: Session) -> Session:
        with _storage_scope(self._session_factory) as db:
            db.add(
                SessionRow(
                    id=session.id.value,
                    user_id=session.user_id.value,
                    expires_at=session.expires_at,
                    created_at=session.created_at,
                )
            )
        return session

    def delete_by_id(self, session_id: SessionId) -> None:
        with _storage_scope(self._session_factory) as session:
            session.execute(delete(SessionRow).where(SessionRow.id == session_id.value))

    def delete_expired(self) -> int:
        now = datetime.now(UTC)
        with _storage_scope(self._session_factory) as session:
            result = session.execute(delete(SessionRow).where(SessionRow.expires_at <= now))
            return int(result.rowcount or 0)
