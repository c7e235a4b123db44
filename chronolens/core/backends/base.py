# chronolens/core/backends/base.py
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence

from chronolens.core.models import CacheEntry, CacheStatsSnapshot, HistoricalEvent
from chronolens.core.stats import StatsTracker
from chronolens.core.ttl import utc_now


class CacheBackend(ABC):
    """
    Storage contract shared by the in-memory and file backends.

    Every operation is a coroutine. Backends own their entries and their
    hit/miss counters; I/O failures are logged and reported as a miss
    (reads) or ignored (writes), never raised.
    """

    name = "base"

    def __init__(self, stats_tracker: StatsTracker, clock: Callable[[], datetime] = utc_now):
        self.stats_tracker = stats_tracker
        self._clock = clock

    def _now(self) -> datetime:
        return self._clock()

    def _make_entry(self, key: str, data: Sequence[HistoricalEvent], ttl_seconds: int) -> CacheEntry:
        now = self._now()
        return CacheEntry(
            key=key,
            data=[event.model_copy(deep=True) for event in data],
            created_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )

    @abstractmethod
    async def get(self, key: str) -> Optional[List[HistoricalEvent]]:
        """Return the cached events, or None on a miss. Records the outcome."""

    @abstractmethod
    async def has(self, key: str) -> bool:
        """Check validity without touching the counters."""

    @abstractmethod
    async def set(self, key: str, data: Sequence[HistoricalEvent], ttl_seconds: int) -> bool:
        """Overwrite the entry for ``key``. Returns False if nothing was written."""

    @abstractmethod
    async def delete(self, key: str) -> None: ...

    @abstractmethod
    async def clear(self) -> int:
        """Remove every entry and reset the counters. Returns the number removed."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove entries whose expiry has passed. Returns the number removed."""

    @abstractmethod
    async def keys(self) -> List[str]:
        """Keys of the currently valid entries."""

    @abstractmethod
    async def stats(self) -> CacheStatsSnapshot: ...
