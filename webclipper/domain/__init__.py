# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .users.entities import SESSION_TTL, Session, User
from .users.exceptions import (
    InvalidCredentialsError,
    OAuthError,
    SessionExpiredError,
    SessionNotFoundError,
    SetupAlreadyCompletedError,
    StorageError,
    UserConflictError,
)
from .values import SessionId, UserId, Username

__all__ = [
    "InvalidCredentialsError",
    "InvariantViolation",
    "OAuthError",
    "SESSION_TTL",
    "Session",
    "SessionExpiredError",
    "SessionId",
    "SessionNotFoundError",
    "SetupAlreadyCompletedError",
    "StorageError",
    "UserConflictError",
    "User",
    "UserId",
    "Username",
]
