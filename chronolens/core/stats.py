# chronolens/core/stats.py
"""
Hit/miss accounting for the cache backends.

The file tracker does a plain read-modify-write of ``_cache_stats.json`` on
every event. Concurrent requests can lose an increment; hit rate is an
observability number, so this is accepted.
"""
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from fastapi.concurrency import run_in_threadpool

from chronolens.core.models import CacheStats
from chronolens.core.ttl import utc_now

logger = logging.getLogger(__name__)

STATS_FILENAME = "_cache_stats.json"


class StatsTracker(ABC):
    @abstractmethod
    async def record_hit(self) -> None: ...

    @abstractmethod
    async def record_miss(self) -> None: ...

    @abstractmethod
    async def snapshot(self) -> CacheStats: ...

    @abstractmethod
    async def reset(self) -> None: ...


class MemoryStatsTracker(StatsTracker):
    """Counters held for the lifetime of the process."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._stats = CacheStats(last_updated=clock())

    async def record_hit(self) -> None:
        self._stats.hits += 1
        self._stats.last_updated = self._clock()

    async def record_miss(self) -> None:
        self._stats.misses += 1
        self._stats.last_updated = self._clock()

    async def snapshot(self) -> CacheStats:
        return self._stats.model_copy()

    async def reset(self) -> None:
        self._stats = CacheStats(last_updated=self._clock())


class FileStatsTracker(StatsTracker):
    """Counters persisted next to the cache entries so restarts keep the history."""

    def __init__(self, cache_dir: str, clock: Callable[[], datetime] = utc_now):
        self.cache_dir = cache_dir
        self.path = os.path.join(cache_dir, STATS_FILENAME)
        self._clock = clock

    def _read(self) -> CacheStats:
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                return CacheStats.model_validate_json(handle.read())
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable cache stats file {self.path}: {e}")
        return CacheStats(last_updated=self._clock())

    def _write(self, stats: CacheStats) -> None:
        os.makedirs(self.cache_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(stats.model_dump_json())
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _increment(self, hit: bool) -> None:
        try:
            stats = self._read()
            if hit:
                stats.hits += 1
            else:
                stats.misses += 1
            stats.last_updated = self._clock()
            self._write(stats)
        except OSError as e:
            logger.error(f"Error updating cache stats: {e}")

    def _reset(self) -> None:
        try:
            self._write(CacheStats(last_updated=self._clock()))
        except OSError as e:
            logger.error(f"Error resetting cache stats: {e}")

    async def record_hit(self) -> None:
        await run_in_threadpool(self._increment, True)

    async def record_miss(self) -> None:
        await run_in_threadpool(self._increment, False)

    async def snapshot(self) -> CacheStats:
        return await run_in_threadpool(self._read)

    async def reset(self) -> None:
        await run_in_threadpool(self._reset)
