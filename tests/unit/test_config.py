"""Tests for CacheSettings loading and validation."""

import pytest
from pydantic import ValidationError

from request_cache.core.config import CacheSettings, get_settings


def test_defaults() -> None:
    settings = CacheSettings()
    assert settings.store_backend == "memory"
    assert settings.sweep_interval_seconds == 60.0
    assert settings.redis_key_prefix == "request_cache"
    assert settings.redis_password is None


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQUEST_CACHE_STORE_BACKEND", "redis")
    monkeypatch.setenv("REQUEST_CACHE_SWEEP_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("REQUEST_CACHE_REDIS_PASSWORD", "secret")
    settings = CacheSettings()
    assert settings.store_backend == "redis"
    assert settings.sweep_interval_seconds == 5.0
    assert settings.redis_password.get_secret_value() == "secret"


def test_invalid_backend_rejected() -> None:
    with pytest.raises(ValidationError, match="store_backend must be one of"):
        CacheSettings(store_backend="memcached")


def test_non_positive_sweep_interval_rejected() -> None:
    with pytest.raises(ValidationError, match="sweep_interval_seconds must be positive"):
        CacheSettings(sweep_interval_seconds=0)


def test_get_settings_cached() -> None:
    assert get_settings() is get_settings()
