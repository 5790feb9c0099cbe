# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session and OAuth-state cookies."""

from __future__ import annotations

import secrets

from flask import Request, Response

from webclipper.domain import Session
from webclipper.shared.config.settings import SecurityConfig

SESSION_COOKIE_NAME = "session_id"
OAUTH_STATE_COOKIE_NAME = "oauth_state"
OAUTH_STATE_MAX_AGE = 600


def read_session_cookie(req: Request) -> str | None:
    return req.cookies.get(SESSION_COOKIE_NAME) or None


def set_session_cookie(response: Response, session: Session, security: SecurityConfig) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session.id.value,
        expires=session.expires_at,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )


def clear_session_cookie(response: Response, security: SecurityConfig) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        "",
        max_age=0,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )


def new_oauth_state() -> str:
    return secrets.token_urlsafe(32)


def set_oauth_state_cookie(response: Response, state: str, security: SecurityConfig) -> None:
    response.set_cookie(
        OAUTH_STATE_COOKIE_NAME,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )


def clear_oauth_state(response: Response, security: SecurityConfig) -> None:
    response.set_cookie(
        OAUTH_STATE_COOKIE_NAME,
        "",
        max_age=0,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )


def verify_oauth_state(req: Request, state: str | None) -> bool:
    saved = req.cookies.get(OAUTH_STATE_COOKIE_NAME)
    if not saved or not state:
        return False
    return secrets.compare_digest(saved.encode(), state.encode())


__all__ = [
    "OAUTH_STATE_COOKIE_NAME",
    "SESSION_COOKIE_NAME",
    "clear_oauth_state",
    "clear_session_cookie",
    "new_oauth_state",
    "read_session_cookie",
    "set_oauth_state_cookie",
    "set_session_cookie",
    "verify_oauth_state",
]
