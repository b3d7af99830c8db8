"""cached_query: two-layer memoization for async query functions.

Lookup order for one call:
    1. request store (current request scope, no I/O)
    2. persistent store (only when ttl_ms > 0)
    3. the query function itself, whose result is then written to every
       active layer

force_refresh skips both lookups but still writes the fresh result back.
Errors from the query function or the store propagate unchanged and leave
both layers untouched. Concurrent calls for the same key are not
deduplicated: each one that misses runs the query.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from functools import wraps
from typing import Any

from request_cache.application.interfaces import StoreAdapter
from request_cache.core.constants import (
    CACHE_LAYER_MISS,
    CACHE_LAYER_REQUEST,
    CACHE_LAYER_STORE,
)
from request_cache.core.context import CacheContext, get_cache_context
from request_cache.domain.exceptions import ConfigurationError
from request_cache.infrastructure.cache.keys import derive_cache_key
from request_cache.infrastructure.cache.scoped_store import get_request_store
from request_cache.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

QueryFn = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class CachedQueryOptions:
    """Per-call configuration for cached_query.

    Attributes:
        query_fn: Async function called as query_fn(*args) on a miss.
        key: Explicit cache key; required unless auto_key is true.
        auto_key: Derive the key from args (SHA-256 of their JSON encoding).
        prefix: Namespace for auto-derived keys ("<prefix>:<digest>").
        args: Positional arguments for query_fn (and for auto-keying).
        ttl_ms: Cross-request TTL in milliseconds; 0 or less disables the
            persistent layer for this call, as does None.
        store: Persistent store override; defaults to the context's store.
        force_refresh: Bypass both lookups; the result is still written back.
    """

    query_fn: QueryFn | None = None
    key: str | None = None
    auto_key: bool = False
    prefix: str = ""
    args: Sequence[Any] = ()
    ttl_ms: int | None = 0
    store: StoreAdapter | None = None
    force_refresh: bool = False


def _resolve_options(
    options: CachedQueryOptions | None, fields: dict[str, Any]
) -> CachedQueryOptions:
    """Merge keyword fields into options; raise ConfigurationError on unknown fields."""
    try:
        if options is None:
            options = CachedQueryOptions(**fields)
        elif fields:
            options = dataclasses.replace(options, **fields)
    except TypeError as e:
        raise ConfigurationError(f"Invalid cached_query option: {e}") from e
    return options


@traced("request_cache.cached_query")
async def cached_query(
    options: CachedQueryOptions | None = None,
    /,
    *,
    context: CacheContext | None = None,
    **fields: Any,
) -> Any:
    """Return the query result, served from the request or persistent cache when possible.

    Accepts a CachedQueryOptions, keyword fields of the same names, or both
    (keywords override the options object).

    Args:
        options: Optional prebuilt options.
        context: Cache context providing the default persistent store;
            defaults to the process-wide context.
        **fields: CachedQueryOptions fields.

    Returns:
        The cached or freshly computed value.

    Raises:
        ConfigurationError: Missing key/query_fn or unserializable auto-key
            args (raised before any cache access or query call).
    """
    opts = _resolve_options(options, fields)
    cache_key = derive_cache_key(
        opts.key, auto_key=opts.auto_key, prefix=opts.prefix, args=opts.args
    )
    if not callable(opts.query_fn):
        raise ConfigurationError("`query_fn` is required.", field="query_fn")
    add_span_attributes(**{"cache.key": cache_key})

    request_store = get_request_store()
    if request_store is not None and not opts.force_refresh and cache_key in request_store:
        logger.debug("Request cache HIT: %s", cache_key)
        add_span_attributes(**{"cache.hit": True, "cache.layer": CACHE_LAYER_REQUEST})
        return request_store[cache_key]

    store: StoreAdapter | None = None
    if opts.ttl_ms and opts.ttl_ms > 0:
        store = opts.store
        if store is None:
            store = (context or get_cache_context()).get_default_store()
        if not opts.force_refresh:
            cached = await store.get(cache_key)
            if cached is not None:
                logger.debug("Store cache HIT: %s", cache_key)
                if request_store is not None:
                    request_store[cache_key] = cached
                add_span_attributes(**{"cache.hit": True, "cache.layer": CACHE_LAYER_STORE})
                return cached

    logger.debug(
        "Cache %s: %s", "REFRESH" if opts.force_refresh else "MISS", cache_key
    )
    add_span_attributes(**{"cache.hit": False, "cache.layer": CACHE_LAYER_MISS})
    result = await opts.query_fn(*opts.args)

    if request_store is not None:
        request_store[cache_key] = result
    if store is not None:
        await store.set(cache_key, result, opts.ttl_ms)
    return result


def cached(
    key: str | None = None,
    *,
    prefix: str | None = None,
    ttl_ms: int | None = 0,
    store: StoreAdapter | None = None,
    key_builder: Callable[..., str] | None = None,
    context: CacheContext | None = None,
) -> Callable[[QueryFn], QueryFn]:
    """Decorator routing every call of an async function through cached_query.

    The wrapped function is called with positional arguments only. Key
    resolution: fixed key if given, else key_builder(*args), else an
    auto-key over args namespaced by prefix (default: the function's
    qualified name). The wrapper's ``refresh(*args)`` forces a recompute.

    Args:
        key: Fixed cache key for every call.
        prefix: Namespace for auto-derived keys.
        ttl_ms: Cross-request TTL in milliseconds (0 = request scope only).
        store: Persistent store override.
        key_builder: Optional callable(*args) -> key.
        context: Cache context override.

    Returns:
        Decorator producing the caching wrapper.
    """

    def decorator(func: QueryFn) -> QueryFn:
        key_prefix = func.__qualname__ if prefix is None else prefix

        def build_options(args: tuple[Any, ...], force_refresh: bool) -> CachedQueryOptions:
            explicit_key = key if key is not None else (key_builder(*args) if key_builder else None)
            return CachedQueryOptions(
                query_fn=func,
                key=explicit_key,
                auto_key=explicit_key is None,
                prefix=key_prefix,
                args=args,
                ttl_ms=ttl_ms,
                store=store,
                force_refresh=force_refresh,
            )

        @wraps(func)
        async def wrapper(*args: Any) -> Any:
            return await cached_query(build_options(args, False), context=context)

        async def refresh(*args: Any) -> Any:
            return await cached_query(build_options(args, True), context=context)

        wrapper.refresh = refresh  # type: ignore[attr-defined]
        return wrapper

    return decorator
