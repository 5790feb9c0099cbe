# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from webclipper.application.dto import AuthenticatedSession
from webclipper.domain import OAuthError, Session, SessionId, StorageError, User
from webclipper.domain.users.repositories import SessionRepository, UserRepository
from webclipper.shared.result import Err, Ok, Result, catch_errors


class GitHubOAuthCallbackUseCase:
    """Sign in with a GitHub identity in single-user mode.

    GitHub never creates accounts here, it only links to the existing one:

    1. A user already linked to ``github_id`` gets a new session.
    2. Otherwise the single local user is loaded:
       a. no user at all -> ``OAUTH_ERROR`` (setup required);
       b. user linked to another GitHub id -> ``OAUTH_ERROR``;
       c. user not linked yet -> link ``github_id``, then open a session.
    """

    def __init__(self, *, users: UserRepository, sessions: SessionRepository) -> None:
        self._users = users
        self._sessions = sessions

    @catch_errors(StorageError)
    def execute(self, github_id: str, github_username: str) -> Result[AuthenticatedSession]:
        linked = self._users.find_by_github_id(github_id)
        if linked is not None:
            return Ok(self._open_session(linked))

        user = self._users.find_first()
        if user is None:
            return Err(OAuthError("No user account exists. Please set up your account first."))
        if user.github_id is not None:
            return Err(OAuthError("Account is already linked to a different GitHub account."))

        saved = self._users.save(user.link_github(github_id))
        return Ok(self._open_session(saved))

    def _open_session(self, user: User) -> AuthenticatedSession:
        session = self._sessions.save(Session.create(id=SessionId.generate(), user_id=user.id))
        return AuthenticatedSession(user=user, session=session)
