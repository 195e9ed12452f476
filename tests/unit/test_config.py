"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from github_webhooks.config import Settings


def test_settings_loads_from_env(monkeypatch: pytest.MonkeyPatch):
    """Test that settings load from environment variables."""
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "test-secret")
    monkeypatch.setenv("MAX_BODY_SIZE", "1024")
    monkeypatch.setenv("WEBHOOK_PREFIX", "/hooks")

    settings = Settings()

    assert settings.github_webhook_secret == "test-secret"
    assert settings.max_body_size == 1024
    assert settings.webhook_prefix == "/hooks"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Test default values for optional settings."""
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "test-secret")
    for key in ["MAX_BODY_SIZE", "WEBHOOK_PREFIX", "LOG_LEVEL", "HOST", "PORT"]:
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.max_body_size == 8_000_000
    assert settings.webhook_prefix == "/api"
    assert settings.log_level == "INFO"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000


def test_settings_requires_secret(monkeypatch: pytest.MonkeyPatch):
    """Test that a missing webhook secret is a configuration error."""
    monkeypatch.delenv("GITHUB_WEBHOOK_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_rejects_empty_secret(monkeypatch: pytest.MonkeyPatch):
    """Test that an empty webhook secret is a configuration error."""
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
