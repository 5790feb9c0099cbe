from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
from conftest import FakeGitHub
from flask import Flask
from flask.testing import FlaskClient

from webclipper.interfaces.http.controllers.auth_controller import AuthController
from webclipper.shared.config import load_config


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def _setup(client: FlaskClient, username: str = "alice", password: str = "secret123"):
    return client.post("/api/auth/setup", json={"username": username, "password": password})


def _set_cookies(response) -> list[str]:
    return response.headers.getlist("Set-Cookie")


def _start_github_login(client: FlaskClient) -> str:
    response = client.get("/api/auth/github")
    query = parse_qs(urlparse(response.headers["Location"]).query)
    return query["state"][0]


def test_status_before_and_after_setup(client: FlaskClient) -> None:
    assert client.get("/api/auth/status").get_json() == {"needsSetup": True}

    _setup(client)

    assert client.get("/api/auth/status").get_json() == {"needsSetup": False}


def test_setup_returns_auth_payload_and_session_cookie(client: FlaskClient) -> None:
    response = _setup(client, username="  alice  ")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["authenticated"] is True
    assert payload["needsSetup"] is False
    assert payload["user"]["username"] == "alice"
    assert payload["user"]["githubLinked"] is False
    assert payload["user"]["id"]

    cookie = next(c for c in _set_cookies(response) if c.startswith("session_id="))
    for attribute in ("Path=/", "HttpOnly", "Secure", "SameSite=Lax", "Expires="):
        assert attribute in cookie


def test_setup_twice_conflicts(client: FlaskClient) -> None:
    _setup(client)

    response = _setup(client, username="bob")

    assert response.status_code == 409
    assert response.get_json() == {
        "error": "SETUP_ALREADY_COMPLETED",
        "message": "Setup already completed",
    }


@pytest.mark.parametrize(
    "body",
    [
        {"username": "ab", "password": "secret123"},
        {"username": "alice", "password": "pw1"},
        {"username": "alice", "password": "x" * 129},
        {"username": "alice"},
        {},
    ],
)
def test_setup_validation(client: FlaskClient, body: dict) -> None:
    response = client.post("/api/auth/setup", json=body)

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "VALIDATION_ERROR"
    if "password" in body:
        assert body["password"] not in response.get_data(as_text=True)
    assert client.get("/api/auth/status").get_json() == {"needsSetup": True}


def test_login_with_valid_credentials(client: FlaskClient) -> None:
    _setup(client)

    response = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    assert response.get_json()["authenticated"] is True
    assert any(c.startswith("session_id=") for c in _set_cookies(response))


def test_login_with_bad_credentials(client: FlaskClient) -> None:
    _setup(client)

    wrong_password = client.post("/api/auth/login", json={"username": "alice", "password": "x"})
    unknown_user = client.post("/api/auth/login", json={"username": "bob", "password": "x"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json() == {
        "error": "INVALID_CREDENTIALS",
        "message": "Invalid username or password",
    }


def test_login_requires_both_fields(client: FlaskClient) -> None:
    response = client.post("/api/auth/login", json={"username": "alice", "password": ""})

    assert response.status_code == 422
    assert response.get_json()["error"] == "VALIDATION_ERROR"


def test_me_without_cookie(client: FlaskClient) -> None:
    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.get_json() == {"authenticated": False, "user": None, "needsSetup": True}


def test_me_with_garbage_cookie_is_anonymous(client: FlaskClient) -> None:
    _setup(client)
    client.set_cookie("session_id", "garbage")

    response = client.get("/api/auth/me")

    assert response.get_json() == {"authenticated": False, "user": None, "needsSetup": False}


def test_logout_always_clears_cookie(client: FlaskClient) -> None:
    response = client.post("/api/auth/logout")

    assert response.status_code == 204
    cookie = next(c for c in _set_cookies(response) if c.startswith("session_id="))
    assert "Max-Age=0" in cookie


def test_logout_with_malformed_cookie_still_succeeds(client: FlaskClient) -> None:
    client.set_cookie("session_id", "garbage")

    response = client.post("/api/auth/logout")

    assert response.status_code == 204


def test_github_redirect_sets_state_cookie(client: FlaskClient) -> None:
    response = client.get("/api/auth/github")

    assert response.status_code == 302
    location = urlparse(response.headers["Location"])
    query = parse_qs(location.query)
    assert location.netloc == "github.com"
    assert query["redirect_uri"] == ["https://clip.example.com/api/auth/github/callback"]
    cookie = next(c for c in _set_cookies(response) if c.startswith("oauth_state="))
    assert f"oauth_state={query['state'][0]}" in cookie
    for attribute in ("Max-Age=600", "HttpOnly", "Secure", "SameSite=Lax"):
        assert attribute in cookie


def test_github_callback_rejects_state_mismatch(client: FlaskClient) -> None:
    _start_github_login(client)

    response = client.get("/api/auth/github/callback?code=abc&state=forged")

    assert response.status_code == 401
    assert response.get_json() == {"error": "OAUTH_ERROR", "message": "Invalid state parameter"}


def test_github_callback_without_state_cookie(client: FlaskClient) -> None:
    response = client.get("/api/auth/github/callback?code=abc&state=whatever")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid state parameter"


def test_github_callback_requires_code(client: FlaskClient) -> None:
    state = _start_github_login(client)

    response = client.get(f"/api/auth/github/callback?state={state}")

    assert response.status_code == 422


def test_github_callback_before_setup(client: FlaskClient) -> None:
    state = _start_github_login(client)

    response = client.get(f"/api/auth/github/callback?code=abc&state={state}")

    assert response.status_code == 401
    assert response.get_json()["message"] == (
        "No user account exists. Please set up your account first."
    )
    cleared = next(c for c in _set_cookies(response) if c.startswith("oauth_state="))
    assert "Max-Age=0" in cleared


def test_github_callback_links_and_redirects(client: FlaskClient, github: FakeGitHub) -> None:
    _setup(client)
    client.post("/api/auth/logout")
    state = _start_github_login(client)

    response = client.get(f"/api/auth/github/callback?code=abc&state={state}")

    assert response.status_code == 302
    assert response.headers["Location"] == "https://clip.example.com"
    assert github.exchanged == ["abc"]
    assert any(c.startswith("session_id=") for c in _set_cookies(response))

    me = client.get("/api/auth/me").get_json()
    assert me["authenticated"] is True
    assert me["user"]["githubLinked"] is True


def test_github_callback_token_failure(client: FlaskClient, github: FakeGitHub) -> None:
    _setup(client)
    github.fail_exchange = True
    state = _start_github_login(client)

    response = client.get(f"/api/auth/github/callback?code=abc&state={state}")

    assert response.status_code == 401
    assert response.get_json() == {"error": "OAUTH_ERROR", "message": "Failed to get access token"}


def test_login_is_rate_limited(client: FlaskClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENABLE_RATE_LIMIT", "true")
    load_config.cache_clear()
    limiter = AuthController.login.limiter
    limiter.reset()
    try:
        statuses = [
            client.post("/api/auth/login", json={"username": "a", "password": "b"}).status_code
            for _ in range(load_config().security.rate_limit_requests + 1)
        ]
    finally:
        limiter.reset()

    assert statuses[-1] == 429
    assert set(statuses[:-1]) == {401}
