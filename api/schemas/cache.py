# api/schemas/cache.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from chronolens.core.models import ExpirationInfo


class CacheStatsResponse(BaseModel):
    """Response model for the cache stats endpoint"""
    backend: str = Field(..., description="Active storage backend: 'file' or 'memory'")
    enabled: bool = True
    keys: int = Field(0, description="Number of valid cache entries")
    expired: int = Field(0, description="Expired or unreadable entries not yet cleaned up")
    total_entries: int = 0
    total_size_bytes: int = 0
    total_size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    last_updated: Optional[datetime] = None
    expiration_info: Dict[str, ExpirationInfo] = Field(default_factory=dict)
    timestamp: datetime


class CacheClearResponse(BaseModel):
    message: str
    removed: int
    timestamp: datetime


class CacheCleanupResponse(BaseModel):
    removed: int = Field(..., description="Number of expired entries deleted")
    timestamp: datetime
