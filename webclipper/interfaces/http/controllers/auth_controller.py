# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, after_this_request, jsonify, redirect, request
from pydantic import ValidationError as PydanticValidationError

from webclipper.application.dto import AuthenticatedSession, AuthStatus
from webclipper.application.interfaces import GitHubOAuthPort
from webclipper.application.use_cases.users.check_setup_status import CheckSetupStatusUseCase
from webclipper.application.use_cases.users.get_auth_status import GetAuthStatusUseCase
from webclipper.application.use_cases.users.github_oauth_callback import (
    GitHubOAuthCallbackUseCase,
)
from webclipper.application.use_cases.users.login_user import LoginUserUseCase
from webclipper.application.use_cases.users.logout_user import LogoutUserUseCase
from webclipper.application.use_cases.users.setup_user import SetupUserUseCase
from webclipper.domain import OAuthError
from webclipper.infrastructure.observability import record_auth_event
from webclipper.interfaces.http.cookies import (
    clear_oauth_state,
    clear_session_cookie,
    new_oauth_state,
    read_session_cookie,
    set_oauth_state_cookie,
    set_session_cookie,
    verify_oauth_state,
)
from webclipper.interfaces.http.dto.auth import (
    AuthStatusDTO,
    GitHubCallbackQueryDTO,
    LoginRequestDTO,
    SetupRequestDTO,
    SetupStatusDTO,
)
from webclipper.shared.config import AppConfig
from webclipper.shared.errors.validation import raise_validation_error
from webclipper.shared.logging import logger
from webclipper.shared.middleware.rate_limit import rate_limit
from webclipper.shared.result import Err, Result

GITHUB_CALLBACK_PATH = "/api/auth/github/callback"


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        config: AppConfig,
        setup_use_case: SetupUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        github_callback_use_case: GitHubOAuthCallbackUseCase,
        auth_status_use_case: GetAuthStatusUseCase,
        setup_status_use_case: CheckSetupStatusUseCase,
        github: GitHubOAuthPort,
    ) -> None:
        self._config = config
        self._setup_use_case = setup_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._github_callback_use_case = github_callback_use_case
        self._auth_status_use_case = auth_status_use_case
        self._setup_status_use_case = setup_status_use_case
        self._github = github

    def _record(self, event: str, result: Result | None = None) -> None:
        record_auth_event(
            event,
            ok=result is not None and not isinstance(result, Err),
            enabled=self._config.observability.metrics_enabled,
        )

    def _signed_in_response(self, auth: AuthenticatedSession) -> Response:
        payload = AuthStatusDTO.from_status(AuthStatus.signed_in(auth.user)).to_wire()
        response = jsonify(payload)
        set_session_cookie(response, auth.session, self._config.security)
        return response

    def status(self) -> tuple[Response, int]:
        status = self._setup_status_use_case.execute().unwrap()
        return jsonify(SetupStatusDTO.from_status(status).to_wire()), 200

    @rate_limit(limit=5)
    def setup(self) -> tuple[Response, int]:
        try:
            dto = SetupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        result = self._setup_use_case.execute(dto.username, dto.password)
        self._record("setup", result)
        if isinstance(result, Err):
            logger.warning(f"auth.setup: rejected code={result.error.code}")
            raise result.error

        logger.info(f"auth.setup: ok user_id={result.value.user.id}")
        return self._signed_in_response(result.value), 200

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.username, dto.password)
        self._record("login", result)
        if isinstance(result, Err):
            logger.warning(
                f"auth.login: failed code={result.error.code} ip={_get_client_ip()}"
            )
            raise result.error

        logger.info(f"auth.login: ok user_id={result.value.user.id}")
        return self._signed_in_response(result.value), 200

    def logout(self) -> Response:
        session_id = read_session_cookie(request)
        if session_id:
            result = self._logout_use_case.execute(session_id)
            self._record("logout", result)
            if isinstance(result, Err):
                logger.warning(f"auth.logout: ignored code={result.error.code}")
            else:
                logger.info("auth.logout: ok")

        response = Response(status=204)
        clear_session_cookie(response, self._config.security)
        return response

    def github_login(self) -> Response:
        if not self._config.github.is_configured():
            raise OAuthError("GitHub OAuth is not configured")

        redirect_uri = f"{self._config.security.app_origin}{GITHUB_CALLBACK_PATH}"
        state = new_oauth_state()
        response = redirect(
            self._github.authorize_url(state=state, redirect_uri=redirect_uri), code=302
        )
        set_oauth_state_cookie(response, state, self._config.security)
        logger.info("auth.github: redirecting to authorize")
        return response

    def github_callback(self) -> Response:
        try:
            query = GitHubCallbackQueryDTO.model_validate(request.args.to_dict())
        except PydanticValidationError as exc:
            raise_validation_error(exc)

        if not verify_oauth_state(request, query.state):
            self._record("github")
            logger.warning(f"auth.github: state mismatch ip={_get_client_ip()}")
            raise OAuthError("Invalid state parameter")

        security = self._config.security

        @after_this_request
        def _drop_state(response: Response) -> Response:
            clear_oauth_state(response, security)
            return response

        try:
            access_token = self._github.exchange_code(query.code)
            identity = self._github.fetch_user(access_token)
        except OAuthError:
            self._record("github")
            raise

        result = self._github_callback_use_case.execute(identity.id, identity.login)
        self._record("github", result)
        if isinstance(result, Err):
            logger.warning(f"auth.github: rejected code={result.error.code}")
            raise result.error

        logger.info(f"auth.github: ok user_id={result.value.user.id}")
        response = redirect(security.app_origin or "/", code=302)
        set_session_cookie(response, result.value.session, security)
        return response

    def me(self) -> tuple[Response, int]:
        status = self._auth_status_use_case.execute(read_session_cookie(request)).unwrap()
        return jsonify(AuthStatusDTO.from_status(status).to_wire()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/status", view_func=self.status, methods=["GET"])
        bp.add_url_rule("/setup", view_func=self.setup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/github", view_func=self.github_login, methods=["GET"])
        bp.add_url_rule("/github/callback", view_func=self.github_callback, methods=["GET"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
