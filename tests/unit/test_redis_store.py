"""Unit tests for RedisStoreAdapter with a mocked redis.asyncio client."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis
from pydantic import SecretStr

from request_cache.application.interfaces import StoreAdapter
from request_cache.core.config import CacheSettings
from request_cache.infrastructure.cache.redis_store import RedisStoreAdapter


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.get.return_value = None
    return client


def test_conforms_to_store_protocol(redis_client: AsyncMock) -> None:
    assert isinstance(RedisStoreAdapter(redis_client), StoreAdapter)


async def test_get_missing_returns_none(redis_client: AsyncMock) -> None:
    store = RedisStoreAdapter(redis_client)
    assert await store.get("k") is None
    redis_client.get.assert_awaited_once_with("k")


async def test_get_decodes_json(redis_client: AsyncMock) -> None:
    redis_client.get.return_value = '{"id": 1, "tags": ["a"]}'
    store = RedisStoreAdapter(redis_client, key_prefix="rc")
    assert await store.get("user") == {"id": 1, "tags": ["a"]}
    redis_client.get.assert_awaited_once_with("rc:user")


async def test_set_with_ttl_uses_milliseconds(redis_client: AsyncMock) -> None:
    store = RedisStoreAdapter(redis_client, key_prefix="rc")
    await store.set("k", {"a": 1}, 1500)
    redis_client.set.assert_awaited_once_with("rc:k", '{"a": 1}', px=1500)


@pytest.mark.parametrize("ttl_ms", [None, 0])
async def test_set_without_ttl_has_no_expiry(redis_client: AsyncMock, ttl_ms: int | None) -> None:
    store = RedisStoreAdapter(redis_client)
    await store.set("k", [1, 2], ttl_ms)
    redis_client.set.assert_awaited_once_with("k", "[1, 2]")


async def test_delete(redis_client: AsyncMock) -> None:
    store = RedisStoreAdapter(redis_client, key_prefix="rc")
    await store.delete("k")
    redis_client.delete.assert_awaited_once_with("rc:k")


async def test_errors_propagate(redis_client: AsyncMock) -> None:
    """Connection failures are not swallowed as cache misses."""
    redis_client.get.side_effect = redis.ConnectionError("down")
    store = RedisStoreAdapter(redis_client)
    with pytest.raises(redis.ConnectionError):
        await store.get("k")


async def test_close_only_closes_owned_client(redis_client: AsyncMock) -> None:
    await RedisStoreAdapter(redis_client).close()
    redis_client.aclose.assert_not_awaited()
    await RedisStoreAdapter(redis_client, owns_client=True).close()
    redis_client.aclose.assert_awaited_once()


async def test_from_settings_builds_owned_client() -> None:
    settings = CacheSettings(
        store_backend="redis",
        redis_host="cache.internal",
        redis_port=6380,
        redis_db=2,
        redis_password=SecretStr("pw"),
        redis_key_prefix="app",
    )
    store = RedisStoreAdapter.from_settings(settings)
    try:
        assert store.key_prefix == "app"
        kwargs = store.redis.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["password"] == "pw"
    finally:
        await store.close()
