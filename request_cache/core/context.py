"""Cache context: shared collaborators for cached_query.

Holds settings and the lifecycle of the default persistent store, the
store used by every TTL-enabled call that does not pass its own. The
store is created on first use and released by close_default_store();
the next use creates a fresh one. Tests build their own CacheContext
instead of touching the process-wide one.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from functools import lru_cache
from typing import TYPE_CHECKING

from request_cache.core.config import CacheSettings, get_settings
from request_cache.core.constants import STORE_BACKEND_REDIS

if TYPE_CHECKING:
    from request_cache.application.interfaces import StoreAdapter

logger = logging.getLogger(__name__)

StoreFactory = Callable[[CacheSettings], "StoreAdapter"]


def build_store_from_settings(settings: CacheSettings) -> StoreAdapter:
    """Default factory: Redis store or in-memory store per settings.store_backend."""
    if settings.store_backend == STORE_BACKEND_REDIS:
        from request_cache.infrastructure.cache.redis_store import RedisStoreAdapter

        return RedisStoreAdapter.from_settings(settings)

    from request_cache.infrastructure.cache.memory_store import InMemoryStoreAdapter

    return InMemoryStoreAdapter(sweep_interval_seconds=settings.sweep_interval_seconds)


class CacheContext:
    """Settings plus a lazily created, explicitly closed default store."""

    def __init__(
        self,
        settings: CacheSettings | None = None,
        store_factory: StoreFactory | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            settings: Optional settings; defaults to get_settings().
            store_factory: Optional callable(settings) -> StoreAdapter used to
                build the default store; defaults to build_store_from_settings.
        """
        self.settings = settings if settings is not None else get_settings()
        self._store_factory = store_factory or build_store_from_settings
        self._default_store: StoreAdapter | None = None
        self._lock = threading.Lock()

    @property
    def has_default_store(self) -> bool:
        return self._default_store is not None

    def get_default_store(self) -> StoreAdapter:
        """Return the default store, creating it on first use."""
        with self._lock:
            if self._default_store is None:
                self._default_store = self._store_factory(self.settings)
                logger.info(
                    "Default cache store created: %s",
                    type(self._default_store).__name__,
                )
            return self._default_store

    async def close_default_store(self) -> None:
        """Close and forget the default store (no-op if never created)."""
        with self._lock:
            store, self._default_store = self._default_store, None
        if store is None:
            return
        close = getattr(store, "close", None)
        if close is not None:
            result = close()
            if inspect.isawaitable(result):
                await result
        logger.info("Default cache store closed: %s", type(store).__name__)


@lru_cache
def get_cache_context() -> CacheContext:
    """Return the process-wide cache context (created once)."""
    return CacheContext()


async def close_default_store() -> None:
    """Close the process-wide default store. Call at shutdown and in test teardown."""
    await get_cache_context().close_default_store()
