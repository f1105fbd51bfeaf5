"""Unit tests for settings."""

import pytest
from pydantic import ValidationError

from grantkeeper.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_JSON", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.database_url.startswith("postgresql://")
    assert settings.environment == "development"
    assert settings.log_json is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/gk")
    monkeypatch.setenv("DATABASE_POOL_MAX_SIZE", "20")
    monkeypatch.setenv("LOG_JSON", "true")
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql://u:p@db:5432/gk"
    assert settings.database_pool_max_size == 20
    assert settings.log_json is True


def test_rejects_unknown_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "qa")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_log_level_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings(_env_file=None).log_level == "DEBUG"


def test_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unknown levels fail at settings load, not inside structlog setup."""
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
