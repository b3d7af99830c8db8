"""Redis-backed persistent store.

StoreAdapter on redis.asyncio for caches shared between processes. Values
are JSON-serialized, so only JSON-compatible query results can be stored.
Redis errors are not swallowed: a failing get/set/delete propagates to the
caller of cached_query.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from request_cache.core.config import CacheSettings
from request_cache.core.constants import CACHE_KEY_SEP

logger = logging.getLogger(__name__)


class RedisStoreAdapter:
    """Async Redis store with millisecond TTLs.

    Keys are namespaced as "<key_prefix>:<key>" when key_prefix is set.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        key_prefix: str = "",
        owns_client: bool = False,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Connected (or lazily connecting) Redis client.
            key_prefix: Optional namespace for all keys.
            owns_client: If True, close() also closes the client.
        """
        self.redis = redis_client
        self.key_prefix = key_prefix
        self._owns_client = owns_client

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "RedisStoreAdapter":
        """Build a store (and its client) from REQUEST_CACHE_REDIS_* settings."""
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password.get_secret_value() if settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        logger.info(
            "Redis store configured: %s:%s/%s",
            settings.redis_host,
            settings.redis_port,
            settings.redis_db,
        )
        return cls(client, key_prefix=settings.redis_key_prefix, owns_client=True)

    def _full_key(self, key: str) -> str:
        if not self.key_prefix:
            return key
        return f"{self.key_prefix}{CACHE_KEY_SEP}{key}"

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value for key, or None if missing."""
        value = await self.redis.get(self._full_key(key))
        if value is None:
            logger.debug("Redis MISS: %s", key)
            return None
        logger.debug("Redis HIT: %s", key)
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store value as JSON; ttl_ms of 0 or None means no expiry."""
        serialized = json.dumps(value)
        if ttl_ms and ttl_ms > 0:
            await self.redis.set(self._full_key(key), serialized, px=ttl_ms)
        else:
            await self.redis.set(self._full_key(key), serialized)
        logger.debug("Redis SET: %s (TTL: %sms)", key, ttl_ms or 0)

    async def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        await self.redis.delete(self._full_key(key))
        logger.debug("Redis DELETE: %s", key)

    async def close(self) -> None:
        """Close the client if this store created it."""
        if self._owns_client and self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis store disconnected")
