"""Cache key derivation. Single place for key format (DRY).

A key is either the caller's explicit string or, with auto-keying, the
SHA-256 digest of the compact JSON encoding of the argument list,
optionally namespaced as "<prefix>:<digest>". JSON objects keep their
insertion order, so callers relying on auto-keying must pass mappings
whose key order is stable.
"""

import json
from collections.abc import Sequence
from typing import Any

from request_cache.core.constants import CACHE_KEY_SEP
from request_cache.domain.exceptions import ConfigurationError
from request_cache.infrastructure.cache.hashing import hash_key


def serialize_args(args: Sequence[Any]) -> str:
    """Encode args as a compact JSON array.

    Raises:
        ConfigurationError: If any argument is not JSON-serializable.
    """
    try:
        return json.dumps(list(args), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"`args` must be JSON-serializable when `auto_key` is true: {e}",
            field="args",
        ) from e


def derive_cache_key(
    key: str | None = None,
    *,
    auto_key: bool = False,
    prefix: str = "",
    args: Sequence[Any] = (),
) -> str:
    """Return the cache key for one cached_query call.

    Args:
        key: Explicit key; required (non-empty) unless auto_key is true.
        auto_key: Derive the key from args instead; key is then ignored.
        prefix: Namespace for auto-derived keys.
        args: Argument list hashed when auto_key is true.

    Returns:
        The cache key string.

    Raises:
        ConfigurationError: If key is missing while auto_key is false, or
            args cannot be serialized.
    """
    if auto_key:
        digest = hash_key(serialize_args(args))
        return f"{prefix}{CACHE_KEY_SEP}{digest}" if prefix else digest
    if not key:
        raise ConfigurationError(
            "`key` is required when `auto_key` is false.", field="key"
        )
    return key
