# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

from webclipper.domain.values import SessionId, UserId

SESSION_TTL = timedelta(days=30)


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class User:

    id: UserId
    username: str
    password_hash: str
    password_salt: str
    github_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        *,
        id: UserId,
        username: str,
        password_hash: str,
        password_salt: str,
        github_id: str | None = None,
    ) -> User:
        now = _now()
        return cls(
            id=id,
            username=username,
            password_hash=password_hash,
            password_salt=password_salt,
            github_id=github_id,
            created_at=now,
            updated_at=now,
        )

    def link_github(self, github_id: str) -> User:
        """Return a copy bound to ``github_id``; ``self`` is left untouched."""

        return replace(self, github_id=github_id, updated_at=_now())

    @property
    def github_linked(self) -> bool:
        return self.github_id is not None


@dataclass(slots=True, frozen=True)
class Session:

    id: SessionId
    user_id: UserId
    expires_at: datetime
    created_at: datetime

    @classmethod
    def create(cls, *, id: SessionId, user_id: UserId) -> Session:
        now = _now()
        return cls(id=id, user_id=user_id, expires_at=now + SESSION_TTL, created_at=now)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or _now()) >= self.expires_at
