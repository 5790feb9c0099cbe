# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Persistence and hashing ports.

Implementations return the entity, ``None`` for "not found", or raise
:class:`~webclipper.domain.users.exceptions.StorageError`. Uniqueness of
``username``, ``github_id`` and session ids is a storage invariant, and so is
the single user row; ``UserRepository.save`` reports those conflicts as
:class:`~webclipper.domain.users.exceptions.UserConflictError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from webclipper.domain.values import SessionId, UserId
from webclipper.shared.result import Result

from .entities import Session, User


@dataclass(slots=True, frozen=True)
class PasswordDigest:
    hash: str
    salt: str


class UserRepository(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_github_id(self, github_id: str) -> User | None: ...
    def find_first(self) -> User | None: ...
    def save(self, user: User) -> User: ...
    def count(self) -> int: ...


class SessionRepository(Protocol):
    def find_by_id(self, session_id: SessionId) -> Session | None: ...
    def save(self, session: Session) -> Session: ...
    def delete_by_id(self, session_id: SessionId) -> None: ...
    def delete_expired(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> Result[PasswordDigest]: ...
    def verify(self, password: str, hashed: str, salt: str) -> Result[bool]: ...
