"""Infrastructure layer: cache key derivation, request scope, and store backends."""
