"""Core: settings, constants, cache context, and application lifespan.

Submodules are imported directly (request_cache.core.config, ...); this
package re-exports nothing so infrastructure can import settings without
pulling in the context.
"""
