"""Application interfaces (ports): the persistent store protocol.

Any backend with these three coroutines can serve as the cross-request
layer of cached_query (DIP). Conformance is structural; no base class
is required.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreAdapter(Protocol):
    """Protocol for TTL-aware persistent stores (in-memory, Redis, ...)."""

    async def get(self, key: str) -> Any:
        """Return the stored value, or None if missing or expired."""
        ...

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store value; ttl_ms of 0 or None means no expiry."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        ...
