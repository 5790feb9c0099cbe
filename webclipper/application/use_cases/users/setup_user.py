# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from webclipper.application.dto import AuthenticatedSession
from webclipper.domain import (
    Session,
    SessionId,
    SetupAlreadyCompletedError,
    StorageError,
    User,
    UserConflictError,
    UserId,
)
from webclipper.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from webclipper.shared.result import Err, Ok, Result, catch_errors


class SetupUserUseCase:
    """Create the one local account and sign it in.

    Only allowed while the user table is empty. Two concurrent calls can both
    pass the count check; the single-row constraint on the user table lets
    only one insert through and the loser gets ``SETUP_ALREADY_COMPLETED``.
    """

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
        if self._users.count() > 0:
            return Err(SetupAlreadyCompletedError())

        digest = self._password_hasher.hash(password)
        if isinstance(digest, Err):
            return digest

        try:
            user = self._users.save(
                User.create(
                    id=UserId.generate(),
                    username=username,
                    password_hash=digest.value.hash,
                    password_salt=digest.value.salt,
                )
            )
        except UserConflictError:
            return Err(SetupAlreadyCompletedError())

        session = self._sessions.save(Session.create(id=SessionId.generate(), user_id=user.id))
        return Ok(AuthenticatedSession(user=user, session=session))
