# chronolens/core/backends/file.py
"""
File-per-key cache backend.

Each entry is a JSON document ``{key, data, created_at, expires_at}`` stored
as ``<sanitized key>.json`` in the cache directory (plus a short hash of
the raw key when sanitizing changed it), next to a shared
``_cache_stats.json``. The directory survives process restarts and can be
shared by several worker processes.
"""
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence

from fastapi.concurrency import run_in_threadpool

from chronolens.core.backends.base import CacheBackend
from chronolens.core.cache_keys import key_filename
from chronolens.core.models import CacheEntry, CacheStatsSnapshot, HistoricalEvent
from chronolens.core.stats import STATS_FILENAME, FileStatsTracker, StatsTracker
from chronolens.core.ttl import utc_now

logger = logging.getLogger(__name__)

ENTRY_SUFFIX = ".json"


@dataclass
class _DirectoryScan:
    valid: int = 0
    expired: int = 0
    size_bytes: int = 0


class FileCacheBackend(CacheBackend):
    name = "file"

    def __init__(
        self,
        cache_dir: str,
        clock: Callable[[], datetime] = utc_now,
        stats_tracker: Optional[StatsTracker] = None,
    ):
        super().__init__(stats_tracker or FileStatsTracker(cache_dir, clock), clock)
        self.cache_dir = cache_dir

    # --- paths ---

    def _path(self, key: str) -> str:
        return os.path.join(self.cache_dir, f"{key_filename(key)}{ENTRY_SUFFIX}")

    def _entry_paths(self) -> Iterator[str]:
        try:
            names = sorted(os.listdir(self.cache_dir))
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f"Cannot list cache directory {self.cache_dir}: {e}")
            return
        for name in names:
            if name.endswith(ENTRY_SUFFIX) and name != STATS_FILENAME:
                yield os.path.join(self.cache_dir, name)

    # --- blocking helpers, run in the thread pool ---

    @staticmethod
    def _unlink_quietly(path: str) -> bool:
        try:
            os.unlink(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Could not delete cache file {path}: {e}")
            return False

    @staticmethod
    def _parse(path: str) -> CacheEntry:
        """Raises FileNotFoundError, OSError, or ValueError for corrupt content."""
        with open(path, "r", encoding="utf-8") as handle:
            return CacheEntry.model_validate_json(handle.read())

    def _load(self, path: str) -> Optional[CacheEntry]:
        try:
            return self._parse(path)
        except FileNotFoundError:
            return None
        except ValueError as e:
            logger.warning(f"Corrupt cache file {path}, deleting it: {e}")
            self._unlink_quietly(path)
            return None
        except OSError as e:
            logger.error(f"Error reading cache file {path}: {e}")
            return None

    def _read_valid(self, key: str) -> Optional[CacheEntry]:
        path = self._path(key)
        entry = self._load(path)
        if entry is None:
            return None
        if entry.key is not None and entry.key != key:
            logger.warning(f"Cache file {path} holds key {entry.key}, not {key}")
            return None
        if not entry.is_valid(self._now()):
            logger.info(f"File cache expired for key: {key}")
            self._unlink_quietly(path)
            return None
        return entry

    def _write(self, key: str, entry: CacheEntry) -> bool:
        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(entry.model_dump_json(indent=2))
                os.replace(tmp_path, self._path(key))
            except OSError:
                self._unlink_quietly(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Error setting file cache data for key {key}: {e}")
            return False
        return True

    def _clear(self) -> int:
        removed = sum(1 for path in list(self._entry_paths()) if self._unlink_quietly(path))
        logger.info(f"File cache cleared - deleted {removed} files")
        return removed

    def _cleanup(self) -> int:
        now = self._now()
        removed = 0
        for path in list(self._entry_paths()):
            try:
                entry = self._parse(path)
            except FileNotFoundError:
                continue
            except (OSError, ValueError):
                # Unreadable records are dropped as if expired.
                if self._unlink_quietly(path):
                    removed += 1
                continue
            if not entry.is_valid(now) and self._unlink_quietly(path):
                removed += 1
        if removed:
            logger.info(f"Cleaned up {removed} expired cache files")
        return removed

    def _valid_keys(self) -> List[str]:
        now = self._now()
        keys = []
        for path in self._entry_paths():
            entry = self._load(path)
            if entry is not None and entry.is_valid(now):
                keys.append(entry.key or os.path.basename(path)[: -len(ENTRY_SUFFIX)])
        return keys

    def _scan(self) -> _DirectoryScan:
        now = self._now()
        scan = _DirectoryScan()
        for path in self._entry_paths():
            try:
                scan.size_bytes += os.path.getsize(path)
                entry = self._parse(path)
            except FileNotFoundError:
                continue
            except (OSError, ValueError):
                scan.expired += 1
                continue
            if entry.is_valid(now):
                scan.valid += 1
            else:
                scan.expired += 1
        return scan

    # --- CacheBackend ---

    async def get(self, key: str) -> Optional[List[HistoricalEvent]]:
        entry = await run_in_threadpool(self._read_valid, key)
        if entry is None:
            logger.debug(f"File cache miss for key: {key}")
            await self.stats_tracker.record_miss()
            return None
        logger.debug(f"File cache hit for key: {key}")
        await self.stats_tracker.record_hit()
        return entry.data

    async def has(self, key: str) -> bool:
        entry = await run_in_threadpool(self._read_valid, key)
        return entry is not None

    async def set(self, key: str, data: Sequence[HistoricalEvent], ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            logger.warning(f"Refusing to cache key {key} with non-positive TTL {ttl_seconds}")
            return False
        entry = self._make_entry(key, data, ttl_seconds)
        written = await run_in_threadpool(self._write, key, entry)
        if written:
            logger.info(f"File cache set for key: {key}, TTL: {ttl_seconds} seconds")
        return written

    async def delete(self, key: str) -> None:
        await run_in_threadpool(self._unlink_quietly, self._path(key))

    async def clear(self) -> int:
        removed = await run_in_threadpool(self._clear)
        await self.stats_tracker.reset()
        return removed

    async def cleanup_expired(self) -> int:
        return await run_in_threadpool(self._cleanup)

    async def keys(self) -> List[str]:
        return await run_in_threadpool(self._valid_keys)

    async def stats(self) -> CacheStatsSnapshot:
        scan = await run_in_threadpool(self._scan)
        counters = await self.stats_tracker.snapshot()
        return CacheStatsSnapshot(
            backend=self.name,
            keys=scan.valid,
            expired=scan.expired,
            total_entries=scan.valid + scan.expired,
            total_size_bytes=scan.size_bytes,
            total_size_mb=round(scan.size_bytes / (1024 * 1024), 2),
            hits=counters.hits,
            misses=counters.misses,
            hit_rate=counters.hit_rate,
            last_updated=counters.last_updated,
        )
