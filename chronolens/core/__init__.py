"""Core functionality for ChronoLens."""

__all__ = ["logger", "models", "cache_keys", "ttl", "stats", "backends", "cache"]
