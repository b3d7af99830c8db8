"""request_cache: request-scoped memoization with an optional TTL cache.

Wrap each request in a scope (RequestCacheMiddleware, run_with_cache,
request_scope) and route reads through cached_query; repeated reads in
one request hit the request store, and calls with ttl_ms > 0 also share
results across requests through a StoreAdapter.
"""

from request_cache.application.coordinator import (
    CachedQueryOptions,
    cached,
    cached_query,
)
from request_cache.application.interfaces import StoreAdapter
from request_cache.core.config import CacheSettings, get_settings
from request_cache.core.context import (
    CacheContext,
    close_default_store,
    get_cache_context,
)
from request_cache.core.lifespan import cache_lifespan
from request_cache.domain.exceptions import (
    ConfigurationError,
    RequestCacheException,
    StoreClosedError,
)
from request_cache.infrastructure.cache import (
    InMemoryStoreAdapter,
    RedisStoreAdapter,
    derive_cache_key,
    hash_key,
    request_scope,
    run_with_cache,
    with_request_cache,
)
from request_cache.middleware import RequestCacheMiddleware
from request_cache.shared.telemetry.logging import install_null_handler

install_null_handler()

__all__ = [
    "CacheContext",
    "CacheSettings",
    "CachedQueryOptions",
    "ConfigurationError",
    "InMemoryStoreAdapter",
    "RedisStoreAdapter",
    "RequestCacheException",
    "RequestCacheMiddleware",
    "StoreAdapter",
    "StoreClosedError",
    "cache_lifespan",
    "cached",
    "cached_query",
    "close_default_store",
    "derive_cache_key",
    "get_cache_context",
    "get_settings",
    "hash_key",
    "request_scope",
    "run_with_cache",
    "with_request_cache",
]
