# api/endpoints/cache.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.schemas.cache import CacheCleanupResponse, CacheClearResponse, CacheStatsResponse
from chronolens.core.cache import EventsCache, get_events_cache

router = APIRouter()
logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/stats", summary="Cache statistics", response_model=CacheStatsResponse)
async def cache_stats(cache: EventsCache = Depends(get_events_cache)):
    try:
        return await cache.stats_snapshot()
    except Exception as e:
        logger.error(f"Error getting cache stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("", summary="Clear the cache", response_model=CacheClearResponse)
async def clear_cache(cache: EventsCache = Depends(get_events_cache)):
    try:
        removed = await cache.clear_all()
        return CacheClearResponse(message="Cache cleared successfully", removed=removed, timestamp=_now())
    except Exception as e:
        logger.error(f"Error clearing cache: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/cleanup", summary="Delete expired cache entries", response_model=CacheCleanupResponse)
async def cleanup_cache(cache: EventsCache = Depends(get_events_cache)):
    try:
        removed = await cache.cleanup_expired()
        return CacheCleanupResponse(removed=removed, timestamp=_now())
    except Exception as e:
        logger.error(f"Error cleaning up cache: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
