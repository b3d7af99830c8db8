"""Pytest configuration and fixtures for request_cache.

Each test gets an isolated CacheContext; the process-wide default store
is closed after every test so no sweep thread outlives its test.
"""

from collections.abc import AsyncIterator

import pytest

from request_cache.core.config import CacheSettings
from request_cache.core.context import CacheContext, close_default_store
from request_cache.infrastructure.cache.memory_store import InMemoryStoreAdapter


class CountingQuery:
    """Async query returning "data-1", "data-2", ... and counting calls."""

    def __init__(self) -> None:
        self.calls = 0
        self.received: list[tuple] = []

    async def __call__(self, *args: object) -> str:
        self.calls += 1
        self.received.append(args)
        return f"data-{self.calls}"


@pytest.fixture
def query() -> CountingQuery:
    """Fresh counting query function."""
    return CountingQuery()


@pytest.fixture
def settings() -> CacheSettings:
    """Settings with defaults (in-memory store, 60s sweep)."""
    return CacheSettings()


@pytest.fixture
async def cache_context(settings: CacheSettings) -> AsyncIterator[CacheContext]:
    """Isolated cache context; its default store is closed on teardown."""
    context = CacheContext(settings=settings)
    yield context
    await context.close_default_store()


@pytest.fixture
async def memory_store() -> AsyncIterator[InMemoryStoreAdapter]:
    """In-memory store closed on teardown."""
    store = InMemoryStoreAdapter()
    yield store
    await store.close()


@pytest.fixture(autouse=True)
async def _release_process_default_store() -> AsyncIterator[None]:
    """Release the process-wide default store after each test."""
    yield
    await close_default_store()
