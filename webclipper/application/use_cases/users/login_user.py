# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64

from webclipper.application.dto import AuthenticatedSession
from webclipper.domain import InvalidCredentialsError, Session, SessionId, StorageError
from webclipper.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from webclipper.shared.logging import logger
from webclipper.shared.result import Err, Ok, Result, catch_errors

# Stand-in digest for unknown usernames; that failure path still runs one key derivation.
_UNKNOWN_USER_HASH = base64.b64encode(bytes(32)).decode("ascii")
_UNKNOWN_USER_SALT = base64.b64encode(bytes(32)).decode("ascii")


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    @catch_errors(StorageError)
    def execute(self, username: str, password: str) -> Result[AuthenticatedSession]:
        user = self._users.find_by_username(username)
        if user is None:
            self._password_hasher.verify(password, _UNKNOWN_USER_HASH, _UNKNOWN_USER_SALT)
            return Err(InvalidCredentialsError())

        verified = self._password_hasher.verify(password, user.password_hash, user.password_salt)
        if isinstance(verified, Err):
            return verified
        if not verified.value:
            return Err(InvalidCredentialsError())

        self._purge_expired_sessions()

        session = self._sessions.save(Session.create(id=SessionId.generate(), user_id=user.id))
        return Ok(AuthenticatedSession(user=user, session=session))

    def _purge_expired_sessions(self) -> None:
        # Housekeeping only; session validity never depends on it.
        try:
            self._sessions.delete_expired()
        except StorageError as exc:
            logger.opt(exception=exc.cause).warning("auth.login: expired session cleanup failed")
