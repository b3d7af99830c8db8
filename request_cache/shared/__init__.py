"""Shared utilities: telemetry and cross-cutting helpers. No caching logic."""
