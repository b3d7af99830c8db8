"""Application lifespan: release the default cache store on shutdown.

Use directly as a FastAPI lifespan, or enter it from an existing one:

    app = FastAPI(lifespan=cache_lifespan)

    @asynccontextmanager
    async def lifespan(app):
        async with cache_lifespan(app):
            yield
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from request_cache.core.context import CacheContext, get_cache_context

logger = logging.getLogger(__name__)


@asynccontextmanager
async def cache_lifespan(
    app: Any = None, context: CacheContext | None = None
) -> AsyncIterator[CacheContext]:
    """Expose the cache context on app.state, then close its default store on exit.

    The default store is not created here; the first TTL-enabled
    cached_query call creates it.
    """
    cache_context = context or get_cache_context()
    state = getattr(app, "state", None)
    if state is not None:
        state.cache_context = cache_context
    try:
        yield cache_context
    finally:
        if cache_context.has_default_store:
            await cache_context.close_default_store()
            logger.info("Cache store released on shutdown")
