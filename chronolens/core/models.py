# chronolens/core/models.py
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

THIS_WEEK = "This Week"


class Category(str, Enum):
    SOCIOLOGY = "Sociology"
    TECHNOLOGY = "Technology"
    PHILOSOPHY = "Philosophy"
    SCIENCE = "Science"
    POLITICS = "Politics"
    ART = "Art"


class ViewType(str, Enum):
    TODAY = "today"
    WEEK = "week"


class HistoricalEvent(BaseModel):
    """A single event as returned by the generator and stored in the cache."""
    title: str = Field(..., description="The title of the historical event")
    date: str = Field(..., description="ISO date of the event (YYYY-MM-DD)")
    description: str = Field(..., description="A 50-100 word description")
    category: str = Field(..., description="One of the ChronoLens categories")
    source: str = Field(..., description="URL to a reputable source")


class HistoricalEventList(BaseModel):
    """Wrapper used for structured LLM output."""
    events: List[HistoricalEvent] = Field(default_factory=list)


class CacheKey(BaseModel):
    """Value object for the (date, category, view type) lookup triple."""
    model_config = ConfigDict(frozen=True)

    date: str
    category: Category
    view_type: ViewType

    def __str__(self) -> str:
        from chronolens.core.cache_keys import build_cache_key
        return build_cache_key(self.date, self.category, self.view_type)


class CacheEntry(BaseModel):
    key: Optional[str] = None
    data: List[HistoricalEvent] = Field(default_factory=list)
    created_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def _check_lifetime(self):
        if not self.expires_at > self.created_at:
            raise ValueError("expires_at must be later than created_at")
        return self

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheStats(BaseModel):
    hits: int = 0
    misses: int = 0
    last_updated: datetime = Field(default_factory=_utcnow)

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CacheStatsSnapshot(BaseModel):
    backend: str
    keys: int = Field(0, description="Number of valid (unexpired) entries")
    expired: int = Field(0, description="Expired or unreadable entries still stored")
    total_entries: int = 0
    total_size_bytes: int = 0
    total_size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    last_updated: Optional[datetime] = None


class ExpirationInfo(BaseModel):
    expires_at: datetime
    description: str
    ttl_seconds: int
