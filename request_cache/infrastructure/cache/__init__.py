"""Cache infrastructure: key derivation, request scope, and persistent stores.

Used by the cached_query coordinator. Key format lives in keys.py (DRY);
stores implement application.interfaces.StoreAdapter.
"""

from request_cache.infrastructure.cache.hashing import hash_key
from request_cache.infrastructure.cache.keys import derive_cache_key, serialize_args
from request_cache.infrastructure.cache.memory_store import (
    CacheEntry,
    InMemoryStoreAdapter,
)
from request_cache.infrastructure.cache.redis_store import RedisStoreAdapter
from request_cache.infrastructure.cache.scoped_store import (
    get_request_store,
    request_scope,
    run_with_cache,
    scope_get,
    scope_has,
    scope_set,
    with_request_cache,
)

__all__ = [
    "CacheEntry",
    "InMemoryStoreAdapter",
    "RedisStoreAdapter",
    "derive_cache_key",
    "get_request_store",
    "hash_key",
    "request_scope",
    "run_with_cache",
    "scope_get",
    "scope_has",
    "scope_set",
    "serialize_args",
    "with_request_cache",
]
