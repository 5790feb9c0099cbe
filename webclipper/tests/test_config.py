from __future__ import annotations

import pytest

from webclipper.shared.config import AppConfig, load_config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "ALLOWED_ORIGINS", "COOKIE_SECURE", "GITHUB_CLIENT_ID"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)

    assert config.database.url == "sqlite:///webclipper.db"
    assert config.security.cookie_secure is True
    assert config.security.cookie_samesite == "Lax"
    assert config.security.app_origin == "http://localhost:5173"
    assert config.github.scope == "read:user"
    assert not config.github.is_configured()


def test_environment_overrides_nested_groups(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:////tmp/clips.db")
    monkeypatch.setenv("ALLOWED_ORIGINS", "*, https://clip.example.com/ ,https://other.example")
    monkeypatch.setenv("COOKIE_SECURE", "false")
    monkeypatch.setenv("GITHUB_CLIENT_ID", "id")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "secret")

    config = load_config()

    assert config.database.url == "sqlite:////tmp/clips.db"
    assert config.database.is_sqlite()
    assert config.security.allowed_origins == [
        "*",
        "https://clip.example.com",
        "https://other.example",
    ]
    assert config.security.app_origin == "https://clip.example.com"
    assert config.security.cookie_secure is False
    assert config.github.is_configured()


def test_load_config_is_cached() -> None:
    assert load_config() is load_config()


def test_production_rejects_default_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "dev")

    with pytest.raises(SystemExit):
        AppConfig()
