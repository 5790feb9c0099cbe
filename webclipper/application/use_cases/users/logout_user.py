"""Use-case for revoking sessions."""

from __future__ import annotations

from webclipper.domain import SessionId, StorageError
from webclipper.domain.users.repositories import SessionRepository
from webclipper.shared.result import Err, Ok, Result, catch_errors


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    @catch_errors(StorageError)
    def execute(self, session_id: str) -> Result[None]:
        parsed = SessionId.create(session_id)
        if isinstance(parsed, Err):
            return parsed
        # Deleting an unknown session is not an error.
        self._sessions.delete_by_id(parsed.value)
        return Ok(None)
