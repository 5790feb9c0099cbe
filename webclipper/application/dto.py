# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from webclipper.domain import Session, User


@dataclass(slots=True, frozen=True)
class AuthenticatedSession:
    user: User
    session: Session


@dataclass(slots=True, frozen=True)
class AuthUser:
    id: str
    username: str
    github_linked: bool

    @classmethod
    def from_user(cls, user: User) -> AuthUser:
        return cls(id=str(user.id), username=user.username, github_linked=user.github_linked)


@dataclass(slots=True, frozen=True)
class AuthStatus:
    authenticated: bool
    user: AuthUser | None
    needs_setup: bool

    @classmethod
    def signed_in(cls, user: User) -> AuthStatus:
        return cls(authenticated=True, user=AuthUser.from_user(user), needs_setup=False)

    @classmethod
    def anonymous(cls, *, needs_setup: bool) -> AuthStatus:
        return cls(authenticated=False, user=None, needs_setup=needs_setup)


@dataclass(slots=True, frozen=True)
class SetupStatus:
    needs_setup: bool
