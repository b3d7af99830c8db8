"""Content-addressed hashing for auto-generated cache keys."""

import hashlib


def hash_key(data: str | bytes) -> str:
    """Return the 64-char lowercase hex SHA-256 digest of data."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()
