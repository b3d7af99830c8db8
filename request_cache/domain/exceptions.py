"""Exceptions raised by the request cache.

Only configuration and lifecycle problems get their own types. Failures
of a query function or of a store backend are never wrapped: they
propagate from cached_query exactly as raised.
"""

from typing import Any


class RequestCacheException(Exception):
    """Base exception for all request cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and API error bodies."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(RequestCacheException):
    """Raised when a cached_query call is misconfigured (before any I/O)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional offending field name.

        Args:
            message: Description of the configuration problem.
            field: Optional option name that is missing or invalid.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class StoreClosedError(RequestCacheException):
    """Raised when a store is used after close()."""

    def __init__(self, store_name: str) -> None:
        super().__init__(
            f"{store_name} is closed and cannot be reused",
            "STORE_CLOSED",
            {"store": store_name},
        )
