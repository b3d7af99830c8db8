"""ASGI middleware: per-request cache scope.

Add as the outermost cache-related middleware so every handler and
dependency runs inside the scope, e.g.
``app.add_middleware(RequestCacheMiddleware)``.
"""

from request_cache.middleware.request_cache import RequestCacheMiddleware

__all__ = ["RequestCacheMiddleware"]
