# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from webclipper.shared.errors.base import DomainError, InfrastructureError


class InvalidCredentialsError(DomainError):
    # Same code and message whether the username or the password was wrong.
    code = "INVALID_CREDENTIALS"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid username or password"


class SessionNotFoundError(DomainError):
    code = "SESSION_NOT_FOUND"
    status = HTTPStatus.UNAUTHORIZED
    message = "Session not found"


class SessionExpiredError(DomainError):
    code = "SESSION_EXPIRED"
    status = HTTPStatus.UNAUTHORIZED
    message = "Session expired"


class SetupAlreadyCompletedError(DomainError):
    code = "SETUP_ALREADY_COMPLETED"
    status = HTTPStatus.CONFLICT
    message = "Setup already completed"


class OAuthError(DomainError):
    code = "OAUTH_ERROR"
    status = HTTPStatus.UNAUTHORIZED
    message = "OAuth authentication failed"


class StorageError(InfrastructureError):
    """Persistence or crypto failure. ``cause`` is kept for logs and never serialised."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("STORAGE_ERROR", message="Internal storage error")
        self.cause = cause


class UserConflictError(StorageError):
    """A user write was rejected by a uniqueness constraint.

    Besides ``username`` and ``github_id``, the users table holds at most one row.
    """
