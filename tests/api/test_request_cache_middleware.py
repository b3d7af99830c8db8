"""HTTP tests for RequestCacheMiddleware on a FastAPI app."""

import asyncio
from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from request_cache.application.coordinator import cached_query
from request_cache.infrastructure.cache.scoped_store import get_request_store
from request_cache.middleware import RequestCacheMiddleware


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    async def load(self, user_id: str) -> dict:
        self.calls += 1
        await asyncio.sleep(0.01)
        return {"id": user_id, "version": self.calls}


@pytest.fixture
def counter() -> Counter:
    return Counter()


@pytest.fixture
def cache_app(counter: Counter) -> FastAPI:
    """App whose endpoints read the same user twice per request."""
    app = FastAPI()
    app.add_middleware(RequestCacheMiddleware)

    async def load_user(user_id: str) -> dict:
        return await cached_query(key=f"user:{user_id}", args=[user_id], query_fn=counter.load)

    @app.get("/users/{user_id}")
    async def get_user(user_id: str) -> dict:
        first = await load_user(user_id)
        second = await load_user(user_id)
        return {"first": first, "second": second, "store_keys": sorted(get_request_store())}

    @app.get("/fail")
    async def fail() -> dict:
        await load_user("stale")
        raise RuntimeError("handler failed")

    return app


@pytest.fixture
async def client(cache_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app (ASGI)."""
    transport = ASGITransport(app=cache_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_memoizes_within_request(client: AsyncClient, counter: Counter) -> None:
    response = await client.get("/users/1")
    assert response.status_code == 200
    data = response.json()
    assert data["first"] == data["second"] == {"id": "1", "version": 1}
    assert data["store_keys"] == ["user:1"]
    assert counter.calls == 1


async def test_fresh_scope_per_request(client: AsyncClient, counter: Counter) -> None:
    await client.get("/users/1")
    response = await client.get("/users/1")
    assert response.json()["first"]["version"] == 2
    assert counter.calls == 2


async def test_concurrent_requests_isolated(client: AsyncClient, counter: Counter) -> None:
    responses = await asyncio.gather(client.get("/users/a"), client.get("/users/b"))
    keys = [r.json()["store_keys"] for r in responses]
    assert keys == [["user:a"], ["user:b"]]
    assert counter.calls == 2


async def test_failed_request_does_not_leak_store(client: AsyncClient, counter: Counter) -> None:
    failed = await client.get("/fail")
    assert failed.status_code == 500
    response = await client.get("/users/1")
    assert response.json()["store_keys"] == ["user:1"]
    assert counter.calls == 2


async def test_scope_reset_when_inner_app_raises() -> None:
    seen: list[object] = []

    async def failing(scope: dict, receive: object, send: object) -> None:
        get_request_store()["seed"] = 1
        raise RuntimeError("handler failed")

    async def recording(scope: dict, receive: object, send: object) -> None:
        seen.append(get_request_store())

    with pytest.raises(RuntimeError, match="handler failed"):
        await RequestCacheMiddleware(failing)({"type": "http"}, None, None)
    assert get_request_store() is None
    await RequestCacheMiddleware(recording)({"type": "http"}, None, None)
    assert seen == [{}]


async def test_non_http_scopes_pass_through() -> None:
    seen: list[object] = []

    async def inner(scope: dict, receive: object, send: object) -> None:
        seen.append(get_request_store())

    app = RequestCacheMiddleware(inner)
    await app({"type": "lifespan"}, None, None)
    await app({"type": "http"}, None, None)
    assert seen[0] is None
    assert seen[1] == {}
