"""Shared telemetry: package logger setup and tracing helpers."""

from request_cache.shared.telemetry.logging import (
    LIBRARY_LOGGER_NAME,
    install_null_handler,
)
from request_cache.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "LIBRARY_LOGGER_NAME",
    "install_null_handler",
    "traced",
    "add_span_attributes",
]
