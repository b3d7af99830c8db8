"""Domain layer: exceptions. No dependencies on infrastructure."""

from request_cache.domain.exceptions import (
    ConfigurationError,
    RequestCacheException,
    StoreClosedError,
)

__all__ = [
    "ConfigurationError",
    "RequestCacheException",
    "StoreClosedError",
]
