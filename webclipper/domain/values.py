# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Validated identifiers and credentials.

Each type is built through ``create`` (untrusted input, returns a result) or
``generate`` (server-minted). Once an instance exists it is well formed, so
downstream code never re-validates it.
"""

from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass

from webclipper.shared.errors.base import ValidationError
from webclipper.shared.result import Err, Ok, Result

from .exceptions import InvariantViolation
from .users.exceptions import InvalidCredentialsError, SessionNotFoundError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
USER_ID_MAX_LENGTH = 64


@dataclass(slots=True, frozen=True)
class UserId:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise InvariantViolation("must be a non-empty string", field="user_id")
        if len(self.value) > USER_ID_MAX_LENGTH:
            raise InvariantViolation("is too long", field="user_id")

    @classmethod
    def create(cls, raw: str) -> Result[UserId]:
        try:
            return Ok(cls(raw))
        except InvariantViolation as exc:
            return Err(InvalidCredentialsError(str(exc)))

    @classmethod
    def generate(cls) -> UserId:
        # 16 random bytes -> 22 url-safe characters
        return cls(secrets.token_urlsafe(16))

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class SessionId:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _is_canonical_uuid(self.value):
            raise InvariantViolation("must be a UUID", field="session_id")

    @classmethod
    def create(cls, raw: str | None) -> Result[SessionId]:
        try:
            return Ok(cls(raw))  # type: ignore[arg-type]
        except InvariantViolation as exc:
            return Err(SessionNotFoundError(str(exc)))

    @classmethod
    def generate(cls) -> SessionId:
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class Username:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvariantViolation("must be a string", field="username")
        if not USERNAME_MIN_LENGTH <= len(self.value) <= USERNAME_MAX_LENGTH:
            raise InvariantViolation(
                f"must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters",
                field="username",
            )
        if self.value != self.value.strip():
            raise InvariantViolation("must not have surrounding spaces", field="username")

    @classmethod
    def create(cls, raw: str) -> Result[Username]:
        try:
            return Ok(cls(raw.strip() if isinstance(raw, str) else raw))
        except InvariantViolation as exc:
            return Err(ValidationError(str(exc), context={"fields": ["username"]}))

    def __str__(self) -> str:
        return self.value


def _is_canonical_uuid(raw: str) -> bool:
    try:
        parsed = uuid.UUID(raw)
    except ValueError:
        return False
    return str(parsed) == raw.lower()


__all__ = [
    "SessionId",
    "USERNAME_MAX_LENGTH",
    "USERNAME_MIN_LENGTH",
    "UserId",
    "Username",
]
