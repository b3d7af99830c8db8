"""Core constants: cache key format and store defaults.

Single source of truth for key structure and lifecycle intervals (DRY).
Used by the key deriver, the stores, and configuration defaults.
"""

# Delimiter between an auto-key prefix and the argument digest
CACHE_KEY_SEP = ":"

# Background sweep interval for the in-memory store (seconds)
DEFAULT_SWEEP_INTERVAL_SECONDS = 60.0

# Namespace for keys written by the Redis store
DEFAULT_REDIS_KEY_PREFIX = "request_cache"

# Supported default-store backends
STORE_BACKEND_MEMORY = "memory"
STORE_BACKEND_REDIS = "redis"
STORE_BACKENDS = frozenset({STORE_BACKEND_MEMORY, STORE_BACKEND_REDIS})

# Span attribute values for which layer served a cached_query call
CACHE_LAYER_REQUEST = "request"
CACHE_LAYER_STORE = "store"
CACHE_LAYER_MISS = "miss"
