# chronolens/core/backends/memory.py
"""
In-memory cache backend with per-entry TTL support.

Entries live only as long as the process. Use it for single-process
deployments; with several workers each one keeps its own cache.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from cachetools import TLRUCache

from chronolens.core.backends.base import CacheBackend
from chronolens.core.models import CacheEntry, CacheStatsSnapshot, HistoricalEvent
from chronolens.core.stats import MemoryStatsTracker, StatsTracker
from chronolens.core.ttl import utc_now

logger = logging.getLogger(__name__)


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at.timestamp()


class MemoryCacheBackend(CacheBackend):
    name = "memory"

    def __init__(
        self,
        maxsize: int = 1000,
        clock: Callable[[], datetime] = utc_now,
        stats_tracker: Optional[StatsTracker] = None,
    ):
        """
        Initialize the cache with a maximum number of entries.

        Args:
            maxsize: Maximum number of entries; when full, the entry closest to expiry is dropped
            clock: Returns the current aware datetime (injectable for tests)
            stats_tracker: Hit/miss counters, in-process by default
        """
        super().__init__(stats_tracker or MemoryStatsTracker(clock), clock)
        self.cache = TLRUCache(maxsize=maxsize, ttu=_entry_expiry, timer=self._timestamp)

    def _timestamp(self) -> float:
        return self._now().timestamp()

    def _evict_expired(self) -> int:
        return len(self.cache.expire())

    async def get(self, key: str) -> Optional[List[HistoricalEvent]]:
        self._evict_expired()
        entry = self.cache.get(key)
        if entry is None:
            logger.debug(f"Memory cache miss for key: {key}")
            await self.stats_tracker.record_miss()
            return None
        logger.debug(f"Memory cache hit for key: {key}")
        await self.stats_tracker.record_hit()
        return [event.model_copy(deep=True) for event in entry.data]

    async def has(self, key: str) -> bool:
        self._evict_expired()
        return key in self.cache

    async def set(self, key: str, data: Sequence[HistoricalEvent], ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            logger.warning(f"Refusing to cache key {key} with non-positive TTL {ttl_seconds}")
            return False
        self.cache[key] = self._make_entry(key, data, ttl_seconds)
        logger.info(f"Memory cache set for key: {key}, TTL: {ttl_seconds} seconds")
        return True

    async def delete(self, key: str) -> None:
        try:
            del self.cache[key]
        except KeyError:
            pass

    async def clear(self) -> int:
        removed = len(self.cache)
        self.cache.clear()
        await self.stats_tracker.reset()
        logger.info(f"Memory cache cleared - removed {removed} entries")
        return removed

    async def cleanup_expired(self) -> int:
        removed = self._evict_expired()
        if removed:
            logger.info(f"Cleaned up {removed} expired memory cache entries")
        return removed

    async def keys(self) -> List[str]:
        self._evict_expired()
        return list(self.cache.keys())

    async def stats(self) -> CacheStatsSnapshot:
        self._evict_expired()
        counters = await self.stats_tracker.snapshot()
        total_size = sum(len(entry.model_dump_json()) for entry in self.cache.values())
        return CacheStatsSnapshot(
            backend=self.name,
            keys=len(self.cache),
            expired=0,
            total_entries=len(self.cache),
            total_size_bytes=total_size,
            total_size_mb=round(total_size / (1024 * 1024), 2),
            hits=counters.hits,
            misses=counters.misses,
            hit_rate=counters.hit_rate,
            last_updated=counters.last_updated,
        )
