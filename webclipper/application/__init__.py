# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .dto import AuthenticatedSession, AuthStatus, AuthUser, SetupStatus
from .interfaces import GitHubIdentity, GitHubOAuthPort
from .use_cases.users.check_setup_status import CheckSetupStatusUseCase
from .use_cases.users.get_auth_status import GetAuthStatusUseCase
from .use_cases.users.github_oauth_callback import GitHubOAuthCallbackUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.setup_user import SetupUserUseCase

__all__ = [
    "AuthStatus",
    "AuthUser",
    "AuthenticatedSession",
    "CheckSetupStatusUseCase",
    "GetAuthStatusUseCase",
    "GitHubIdentity",
    "GitHubOAuthCallbackUseCase",
    "GitHubOAuthPort",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "SetupStatus",
    "SetupUserUseCase",
]
