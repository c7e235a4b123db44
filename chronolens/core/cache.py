# chronolens/core/cache.py
"""
Events cache facade with calendar-aware TTL support.

Callers build a key, ``lookup`` it, and on a miss fetch fresh events and
``store`` them back. Caching is an optimization: any backend failure is
logged and treated as a miss (reads) or as caching being off (writes).
"""
import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from chronolens.core.backends import CacheBackend, FileCacheBackend, MemoryCacheBackend
from chronolens.core.cache_keys import build_cache_key
from chronolens.core.models import Category, ExpirationInfo, HistoricalEvent, ViewType
from chronolens.core.ttl import TTLPolicy, resolve_timezone, utc_now
from config.config import Settings, settings as app_settings

logger = logging.getLogger(__name__)

EventLike = Union[HistoricalEvent, Mapping[str, Any]]


class EventsCache:
    def __init__(
        self,
        backend: CacheBackend,
        ttl_policy: Optional[TTLPolicy] = None,
        enabled: bool = True,
        cleanup_interval: int = 3600,
    ):
        """
        Args:
            backend: The single storage backend used for the process lifetime
            ttl_policy: Computes expiry from calendar boundaries
            enabled: When False every lookup misses and every store is a no-op
            cleanup_interval: Minimum seconds between opportunistic expiry sweeps
        """
        self.backend = backend
        self.ttl_policy = ttl_policy or TTLPolicy()
        self.enabled = enabled
        self.cleanup_interval = cleanup_interval
        self._last_cleanup: Optional[datetime] = None

    @staticmethod
    def build_key(date: str, category: Union[Category, str], view_type: Union[ViewType, str]) -> str:
        return build_cache_key(date, category, view_type)

    def _now(self) -> datetime:
        return self.ttl_policy.clock()

    async def lookup(self, key: str) -> Optional[List[HistoricalEvent]]:
        """Return cached events for ``key`` or None on a miss."""
        if not self.enabled:
            return None
        try:
            return await self.backend.get(key)
        except Exception as e:
            logger.error(f"Error getting cache data for key {key}: {e}", exc_info=True)
            return None

    async def has_valid(self, key: str) -> bool:
        if not self.enabled:
            return False
        try:
            return await self.backend.has(key)
        except Exception as e:
            logger.error(f"Error checking cache validity for key {key}: {e}", exc_info=True)
            return False

    async def store(self, key: str, data: Sequence[EventLike], view_type: Union[ViewType, str]) -> bool:
        """
        Cache ``data`` until the boundary for ``view_type``.

        Empty payloads are never cached so a failed generation is retried on
        the next request instead of being served as "no events" all day.
        """
        if not self.enabled:
            return False
        if not data:
            logger.info(f"Not caching empty result for key: {key}")
            return False
        try:
            events = [HistoricalEvent.model_validate(event) for event in data]
            ttl_seconds = self.ttl_policy.ttl_for_view(view_type, self._now())
            stored = await self.backend.set(key, events, ttl_seconds)
        except Exception as e:
            logger.error(f"Error setting cache data for key {key}: {e}", exc_info=True)
            return False
        if stored:
            await self._maybe_cleanup()
        return stored

    async def invalidate(self, key: str) -> None:
        try:
            await self.backend.delete(key)
        except Exception as e:
            logger.error(f"Error deleting cache key {key}: {e}", exc_info=True)

    async def clear_all(self) -> int:
        try:
            return await self.backend.clear()
        except Exception as e:
            logger.error(f"Error clearing cache: {e}", exc_info=True)
            return 0

    async def cleanup_expired(self) -> int:
        self._last_cleanup = self._now()
        try:
            return await self.backend.cleanup_expired()
        except Exception as e:
            logger.error(f"Error cleaning up expired cache: {e}", exc_info=True)
            return 0

    async def _maybe_cleanup(self) -> None:
        now = self._now()
        if self._last_cleanup is None:
            self._last_cleanup = now
            return
        if (now - self._last_cleanup).total_seconds() >= self.cleanup_interval:
            await self.cleanup_expired()

    def expiration_info(self, view_type: Union[ViewType, str]) -> ExpirationInfo:
        return self.ttl_policy.expiration_info(view_type, self._now())

    async def stats_snapshot(self) -> Dict[str, Any]:
        """Backend counters merged with the current expiry boundaries for both views."""
        now = self._now()
        try:
            snapshot = (await self.backend.stats()).model_dump(mode="json")
        except Exception as e:
            logger.error(f"Error getting cache stats: {e}", exc_info=True)
            snapshot = {
                "backend": self.backend.name,
                "keys": 0,
                "hits": 0,
                "misses": 0,
                "hit_rate": 0.0,
            }
        snapshot["enabled"] = self.enabled
        snapshot["expiration_info"] = {
            view.value: self.ttl_policy.expiration_info(view, now).model_dump(mode="json")
            for view in ViewType
        }
        snapshot["timestamp"] = now.isoformat()
        return snapshot


def build_cache_backend(settings: Settings, clock=utc_now) -> CacheBackend:
    """
    Factory: read the configuration and return the matching backend.
    """
    kind = (settings.CACHE_BACKEND or "").lower()

    if kind == "memory":
        logger.info(f"Cache backend: in-memory (maxsize={settings.CACHE_MEMORY_MAXSIZE}).")
        return MemoryCacheBackend(maxsize=settings.CACHE_MEMORY_MAXSIZE, clock=clock)

    if kind and kind != "file":
        logger.warning(f"Cache backend '{kind}' is not supported. Falling back to the file cache.")
    logger.info(f"Cache backend: file ({settings.CACHE_DIR}).")
    return FileCacheBackend(settings.CACHE_DIR, clock=clock)


def build_events_cache(settings: Settings, clock=utc_now) -> EventsCache:
    return EventsCache(
        backend=build_cache_backend(settings, clock),
        ttl_policy=TTLPolicy(resolve_timezone(settings.CACHE_TIMEZONE), clock),
        enabled=settings.CACHE_ENABLED,
        cleanup_interval=settings.CACHE_CLEANUP_INTERVAL,
    )


@lru_cache(maxsize=None)
def get_events_cache() -> EventsCache:
    """The process-wide cache, built once from the application settings."""
    return build_events_cache(app_settings)
