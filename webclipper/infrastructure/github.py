# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""GitHub OAuth web-flow client."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

import httpx

from webclipper.application.interfaces import GitHubIdentity, GitHubOAuthPort
from webclipper.domain import OAuthError
from webclipper.infrastructure.resilience import CircuitBreaker, CircuitOpenError, resilient_call
from webclipper.shared.config.settings import GitHubConfig, ResilienceConfig
from webclipper.shared.logging import logger

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_URL = "https://api.github.com/user"
USER_AGENT = "web-clipper"


class GitHubOAuthClient(GitHubOAuthPort):
    def __init__(
        self,
        config: GitHubConfig,
        resilience: ResilienceConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._resilience = resilience
        self._breaker = CircuitBreaker.from_config(resilience)
        self._client = httpx.Client(
            timeout=config.timeout,
            transport=transport,
            headers={"User-Agent": USER_AGENT},
        )

    def close(self) -> None:
        self._client.close()

    def authorize_url(self, *, state: str, redirect_uri: str) -> str:
        query = urlencode(
            {
                "client_id": self._config.client_id,
                "redirect_uri": redirect_uri,
                "scope": self._config.scope,
                "state": state,
            }
        )
        return f"{AUTHORIZE_URL}?{query}"

    def exchange_code(self, code: str) -> str:
        payload = self._request_json(
            "POST",
            ACCESS_TOKEN_URL,
            failure="Failed to get access token",
            json={
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret,
                "code": code,
            },
            headers={"Accept": "application/json"},
        )
        token = payload.get("access_token")
        if not token:
            logger.warning(f"github: token exchange rejected error={payload.get('error')}")
            raise OAuthError("Failed to get access token")
        return str(token)

    def fetch_user(self, access_token: str) -> GitHubIdentity:
        payload = self._request_json(
            "GET",
            USER_URL,
            failure="Failed to get GitHub user info",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        github_id = payload.get("id")
        if not github_id:
            logger.warning("github: user payload without id")
            raise OAuthError("Failed to get GitHub user info")
        return GitHubIdentity(id=str(github_id), login=str(payload.get("login") or ""))

    def _request_json(
        self, method: str, url: str, *, failure: str, **kwargs: Any
    ) -> dict[str, Any]:
        try:
            response = resilient_call(
                self._client.request,
                method,
                url,
                config=self._resilience,
                breaker=self._breaker,
                retry_on=(httpx.TransportError,),
                **kwargs,
            )
        except CircuitOpenError as exc:
            logger.warning(f"github: circuit open, skipping {method} {url}")
            raise OAuthError(failure) from exc
        except httpx.HTTPError as exc:
            logger.opt(exception=exc).error(f"github: {method} {url} failed")
            raise OAuthError(failure) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error(f"github: non-JSON response status={response.status_code} url={url}")
            raise OAuthError(failure) from exc
        if not isinstance(payload, dict):
            raise OAuthError(failure)
        return payload


__all__ = ["GitHubOAuthClient"]
