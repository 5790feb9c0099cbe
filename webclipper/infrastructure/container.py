# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine

from webclipper.application.interfaces import GitHubOAuthPort
from webclipper.application.services.password_hashing import Pbkdf2PasswordHasher
from webclipper.application.use_cases.users.check_setup_status import CheckSetupStatusUseCase
from webclipper.application.use_cases.users.get_auth_status import GetAuthStatusUseCase
from webclipper.application.use_cases.users.github_oauth_callback import (
    GitHubOAuthCallbackUseCase,
)
from webclipper.application.use_cases.users.login_user import LoginUserUseCase
from webclipper.application.use_cases.users.logout_user import LogoutUserUseCase
from webclipper.application.use_cases.users.setup_user import SetupUserUseCase
from webclipper.infrastructure.db import build_engine, build_session_factory
from webclipper.infrastructure.db.session import SessionFactory
from webclipper.infrastructure.github import GitHubOAuthClient
from webclipper.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from webclipper.interfaces.http.controllers.auth_controller import AuthController
from webclipper.interfaces.http.controllers.misc_controller import MiscController
from webclipper.interfaces.http.session_auth import SessionGuard
from webclipper.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        engine: Engine | None = None,
        github: GitHubOAuthPort | None = None,
    ) -> None:
        self.config = config or load_config()
        if engine is not None:
            self.__dict__["engine"] = engine
        if github is not None:
            self.__dict__["github_client"] = github

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        return build_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory)

    # Services

    @cached_property
    def password_hasher(self) -> Pbkdf2PasswordHasher:
        return Pbkdf2PasswordHasher()

    @cached_property
    def github_client(self) -> GitHubOAuthPort:
        return GitHubOAuthClient(self.config.github, self.config.resilience)

    # Use cases

    @cached_property
    def setup_user_use_case(self) -> SetupUserUseCase:
        return SetupUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def github_oauth_callback_use_case(self) -> GitHubOAuthCallbackUseCase:
        return GitHubOAuthCallbackUseCase(
            users=self.user_repository, sessions=self.session_repository
        )

    @cached_property
    def get_auth_status_use_case(self) -> GetAuthStatusUseCase:
        return GetAuthStatusUseCase(users=self.user_repository, sessions=self.session_repository)

    @cached_property
    def check_setup_status_use_case(self) -> CheckSetupStatusUseCase:
        return CheckSetupStatusUseCase(users=self.user_repository)

    # HTTP boundary

    @cached_property
    def session_guard(self) -> SessionGuard:
        return SessionGuard(sessions=self.session_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            config=self.config,
            setup_use_case=self.setup_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            github_callback_use_case=self.github_oauth_callback_use_case,
            auth_status_use_case=self.get_auth_status_use_case,
            setup_status_use_case=self.check_setup_status_use_case,
            github=self.github_client,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            engine=self.engine,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
