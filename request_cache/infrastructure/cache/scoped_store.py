"""Request-scoped store using contextvars.

Each logical request gets a fresh dict bound to a ContextVar. The binding
follows the request through every await and into tasks it creates, and
is never visible to concurrently running requests. Outside any scope the
store is simply absent (the request layer is disabled, not an error).

Usage:
    await run_with_cache(handler, request)

    with request_scope():
        value = await cached_query(key="user:1", query_fn=load_user)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")

RequestStore = dict[str, Any]

# Store for the current request (set by request_scope, read by cached_query).
_request_store: ContextVar[RequestStore | None] = ContextVar(
    "request_cache_store", default=None
)


@contextmanager
def request_scope() -> Iterator[RequestStore]:
    """Bind a fresh, empty request store for the duration of the block.

    Nested scopes shadow the outer store; the previous binding is restored
    on exit, including when the block raises.
    """
    store: RequestStore = {}
    token = _request_store.set(store)
    try:
        yield store
    finally:
        _request_store.reset(token)


async def run_with_cache(
    body: Callable[P, Awaitable[T]], *args: P.args, **kwargs: P.kwargs
) -> T:
    """Await body(*args, **kwargs) inside a fresh request scope and return its result."""
    with request_scope():
        return await body(*args, **kwargs)


def with_request_cache(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Decorator: run each call of an async function in its own request scope.

    For entry points without HTTP middleware (background jobs, queue consumers).
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return await run_with_cache(func, *args, **kwargs)

    return wrapper


def get_request_store() -> RequestStore | None:
    """Return the active request store, or None outside any scope."""
    return _request_store.get()


def scope_has(key: str) -> bool:
    """Return True if key is memoized in the active scope."""
    store = _request_store.get()
    return store is not None and key in store


def scope_get(key: str) -> Any:
    """Return the value memoized under key in the active scope, or None."""
    store = _request_store.get()
    if store is None:
        return None
    return store.get(key)


def scope_set(key: str, value: Any) -> None:
    """Memoize value under key in the active scope; no-op outside any scope."""
    store = _request_store.get()
    if store is not None:
        store[key] = value
