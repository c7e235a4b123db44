"""Storage backends for the events cache."""

from .base import CacheBackend
from .file import FileCacheBackend
from .memory import MemoryCacheBackend

__all__ = ["CacheBackend", "FileCacheBackend", "MemoryCacheBackend"]
