from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from webclipper.domain import OAuthError
from webclipper.infrastructure.github import GitHubOAuthClient
from webclipper.shared.config.settings import GitHubConfig, ResilienceConfig


def _client(handler, *, retries: int = 0) -> GitHubOAuthClient:
    return GitHubOAuthClient(
        GitHubConfig(client_id="client-id", client_secret="client-secret"),
        ResilienceConfig(max_retries=retries, backoff_base=0.01, backoff_cap=0.01),
        transport=httpx.MockTransport(handler),
    )


def test_authorize_url() -> None:
    client = _client(lambda request: httpx.Response(500))

    url = urlparse(client.authorize_url(state="xyz", redirect_uri="https://app/cb"))

    assert f"{url.scheme}://{url.netloc}{url.path}" == "https://github.com/login/oauth/authorize"
    assert parse_qs(url.query) == {
        "client_id": ["client-id"],
        "redirect_uri": ["https://app/cb"],
        "scope": ["read:user"],
        "state": ["xyz"],
    }


def test_exchange_code_posts_credentials() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"access_token": "gho_abc", "token_type": "bearer"})

    assert _client(handler).exchange_code("the-code") == "gho_abc"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://github.com/login/oauth/access_token"
    assert request.headers["Accept"] == "application/json"
    assert json.loads(request.content) == {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "code": "the-code",
    }


def test_exchange_code_without_token() -> None:
    client = _client(lambda request: httpx.Response(200, json={"error": "bad_verification_code"}))

    with pytest.raises(OAuthError) as excinfo:
        client.exchange_code("stale")

    assert excinfo.value.message == "Failed to get access token"


def test_fetch_user_stringifies_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 4242, "login": "octocat"})

    identity = _client(handler).fetch_user("gho_abc")

    assert identity.id == "4242"
    assert identity.login == "octocat"
    assert seen[0].headers["Authorization"] == "Bearer gho_abc"
    assert seen[0].headers["User-Agent"] == "web-clipper"


def test_fetch_user_without_id() -> None:
    client = _client(lambda request: httpx.Response(401, json={"message": "Bad credentials"}))

    with pytest.raises(OAuthError) as excinfo:
        client.fetch_user("revoked")

    assert excinfo.value.message == "Failed to get GitHub user info"


def test_non_json_response() -> None:
    client = _client(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

    with pytest.raises(OAuthError):
        client.fetch_user("gho_abc")


def test_transport_errors_are_retried() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("boom", request=request)
        return httpx.Response(200, json={"access_token": "gho_abc"})

    assert _client(handler, retries=2).exchange_code("code") == "gho_abc"
    assert calls["count"] == 2


def test_persistent_transport_error_becomes_oauth_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(OAuthError) as excinfo:
        _client(handler, retries=1).exchange_code("code")

    assert excinfo.value.message == "Failed to get access token"
