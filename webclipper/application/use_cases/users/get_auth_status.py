# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from webclipper.application.dto import AuthStatus
from webclipper.domain import SessionId, StorageError
from webclipper.domain.users.repositories import SessionRepository, UserRepository
from webclipper.shared.result import Err, Ok, Result, catch_errors


class GetAuthStatusUseCase:
    """Resolve the caller's session into an auth status.

    A missing, malformed, unknown or expired session id, or a session whose
    user row is gone, all resolve to "not authenticated". A malformed id is
    never reported as its own error.
    """

    def __init__(self, *, users: UserRepository, sessions: SessionRepository) -> None:
        self._users = users
        self._sessions = sessions

    @catch_errors(StorageError)
    def execute(self, session_id: str | None) -> Result[AuthStatus]:
        if not session_id:
            return self._anonymous()

        parsed = SessionId.create(session_id)
        if isinstance(parsed, Err):
            return self._anonymous()

        session = self._sessions.find_by_id(parsed.value)
        if session is None or session.is_expired():
            return self._anonymous()

        user = self._users.find_by_id(session.user_id)
        if user is None:
            return self._anonymous()

        return Ok(AuthStatus.signed_in(user))

    def _anonymous(self) -> Result[AuthStatus]:
        return Ok(AuthStatus.anonymous(needs_setup=self._users.count() == 0))
