"""Library configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support; every field has a default, so no environment is
required. Invalid values are rejected at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from request_cache.core.constants import (
    DEFAULT_REDIS_KEY_PREFIX,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    STORE_BACKEND_MEMORY,
    STORE_BACKENDS,
)


class CacheSettings(BaseSettings):
    """Settings loaded from REQUEST_CACHE_* environment variables and .env."""

    # Default persistent store: "memory" (in-process) or "redis"
    store_backend: str = STORE_BACKEND_MEMORY
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS

    # Redis (only read when store_backend is "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_key_prefix: str = DEFAULT_REDIS_KEY_PREFIX

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_store(self) -> "CacheSettings":
        """Validate store backend and sweep interval."""
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"store_backend must be one of {sorted(STORE_BACKENDS)}, "
                f"got: {self.store_backend!r}"
            )
        if self.sweep_interval_seconds <= 0:
            raise ValueError(
                "sweep_interval_seconds must be positive, "
                f"got: {self.sweep_interval_seconds!r}"
            )
        return self


@lru_cache
def get_settings() -> CacheSettings:
    """Return cached settings instance (loaded once per process)."""
    return CacheSettings()
