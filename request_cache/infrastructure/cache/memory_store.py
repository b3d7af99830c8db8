"""In-memory persistent store with TTL and a background sweep.

Reference StoreAdapter: entries live in process memory as (value, expires_at)
pairs. Expired entries are treated as absent on every read and deleted
lazily; a daemon thread purges the rest periodically so keys that are never
read again do not accumulate. The sweep runs on a thread rather than an
asyncio task so one instance can be shared across event loops.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from request_cache.core.constants import DEFAULT_SWEEP_INTERVAL_SECONDS
from request_cache.domain.exceptions import StoreClosedError

logger = logging.getLogger(__name__)

_JOIN_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class CacheEntry:
    """Stored value with absolute monotonic expiry (None = never)."""

    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at <= now


class InMemoryStoreAdapter:
    """Thread-safe in-process store with lazy and periodic expiry.

    Call close() (or use ``async with``) at shutdown to stop the sweep
    thread. A closed store rejects all further operations.
    """

    def __init__(
        self, sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    ) -> None:
        """Initialize the store and start the sweep thread.

        Args:
            sweep_interval_seconds: Seconds between background purges.
        """
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        self.sweep_interval_seconds = sweep_interval_seconds
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._closed = False
        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name="request-cache-sweeper",
            daemon=True,
        )
        self._sweeper.start()
        logger.debug(
            "InMemoryStoreAdapter started (sweep every %ss)", sweep_interval_seconds
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        """Physical entry count, including expired entries not yet purged."""
        with self._lock:
            return len(self._entries)

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError(type(self).__name__)

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.sweep_interval_seconds):
            self.purge_expired()

    def purge_expired(self) -> int:
        """Delete every expired entry. Returns the number removed."""
        now = time.monotonic()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("Purged %s expired cache entries", len(expired))
        return len(expired)

    async def get(self, key: str) -> Any | None:
        """Return the value for key, or None if missing or expired.

        Args:
            key: Cache key.

        Returns:
            Stored value or None.
        """
        self._ensure_open()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(time.monotonic()):
                del self._entries[key]
                logger.debug("Store cache EXPIRED: %s", key)
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store value under key.

        Args:
            key: Cache key.
            value: Any Python object (stored by reference, not copied).
            ttl_ms: Time-to-live in milliseconds; 0 or None never expires.
        """
        self._ensure_open()
        expires_at = time.monotonic() + ttl_ms / 1000 if ttl_ms and ttl_ms > 0 else None
        with self._lock:
            self._entries[key] = CacheEntry(value, expires_at)

    async def delete(self, key: str) -> None:
        """Remove key if present."""
        self._ensure_open()
        with self._lock:
            self._entries.pop(key, None)

    async def close(self) -> None:
        """Stop the sweep thread and drop all entries. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._stop.set()
        await asyncio.to_thread(self._sweeper.join, _JOIN_TIMEOUT_SECONDS)
        with self._lock:
            self._entries.clear()
        logger.debug("InMemoryStoreAdapter closed")

    async def __aenter__(self) -> "InMemoryStoreAdapter":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
