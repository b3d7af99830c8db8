"""Application layer: the StoreAdapter port and the cached_query coordinator."""

from request_cache.application.coordinator import (
    CachedQueryOptions,
    cached,
    cached_query,
)
from request_cache.application.interfaces import StoreAdapter

__all__ = [
    "CachedQueryOptions",
    "StoreAdapter",
    "cached",
    "cached_query",
]
