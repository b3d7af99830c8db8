"""Request cache middleware.

Opens one request scope per HTTP request (and per WebSocket connection)
so every cached_query call made while handling it shares one request
store. Lifespan events pass through untouched.
Uses raw ASGI (no BaseHTTPMiddleware) so the scope covers streaming
responses and the handler runs in the same context as the binding.
"""

import logging
from typing import Callable

from request_cache.infrastructure.cache.scoped_store import request_scope

logger = logging.getLogger(__name__)

_SCOPED_TYPES = frozenset({"http", "websocket"})


def RequestCacheMiddleware(app: Callable) -> Callable:
    """Run each HTTP/WebSocket request inside a fresh request scope. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] not in _SCOPED_TYPES:
            await app(scope, receive, send)
            return
        with request_scope():
            await app(scope, receive, send)

    return asgi_app
