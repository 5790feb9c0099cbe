# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import g, request

from webclipper.domain import (
    Session,
    SessionExpiredError,
    SessionId,
    SessionNotFoundError,
    StorageError,
)
from webclipper.domain.users.repositories import SessionRepository
from webclipper.shared.logging import logger
from webclipper.shared.result import Err

from .cookies import read_session_cookie

P = ParamSpec("P")
R = TypeVar("R")


class SessionGuard:
    """Gate views behind a live session; the owner's id lands on ``g.user_id``."""

    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def authenticate(self, raw_session_id: str | None) -> Session:
        if not raw_session_id:
            raise SessionNotFoundError("Authentication required")

        parsed = SessionId.create(raw_session_id)
        if isinstance(parsed, Err):
            raise SessionNotFoundError("Invalid session")

        try:
            session = self._sessions.find_by_id(parsed.value)
        except StorageError as exc:
            logger.opt(exception=exc.cause).warning("session_guard: lookup failed")
            session = None

        if session is None or session.is_expired():
            raise SessionExpiredError("Session expired")
        return session

    def required(self, view: Callable[P, R]) -> Callable[P, R]:
        @wraps(view)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            session = self.authenticate(read_session_cookie(request))
            g.user_id = session.user_id.value
            return view(*args, **kwargs)

        return wrapper


__all__ = ["SessionGuard"]
