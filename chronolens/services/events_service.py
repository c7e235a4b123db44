# chronolens/services/events_service.py
"""
Read-through service for historical events.

This is the integration point for a public events route: it looks the triple
up in the cache, asks the generator on a miss and stores non-empty results.
The HTTP app here only exposes the cache admin endpoints, so nothing routes
to it yet.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from chronolens.core.cache import EventsCache, get_events_cache
from chronolens.core.models import THIS_WEEK, Category, HistoricalEvent, ViewType
from chronolens.generation.events_generator import HistoricalEventsGenerator

logger = logging.getLogger(__name__)


class EventsResult(BaseModel):
    data: List[HistoricalEvent] = Field(default_factory=list)
    cached: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HistoricalEventsService:
    """Serve events from the cache, generating and storing them on a miss."""

    def __init__(
        self,
        cache: Optional[EventsCache] = None,
        generator: Optional[HistoricalEventsGenerator] = None,
    ) -> None:
        self.cache = cache or get_events_cache()
        self.generator = generator or HistoricalEventsGenerator()

    async def get_events(
        self,
        date: str,
        category: Union[Category, str],
        view_type: Union[ViewType, str],
    ) -> EventsResult:
        view = ViewType(view_type)
        key = self.cache.build_key(date, category, view)

        cached = await self.cache.lookup(key)
        if cached:
            return EventsResult(data=cached, cached=True)

        logger.info(f"Fetching fresh events from the LLM for: {key}")
        events = await self.generator.generate(THIS_WEEK if view is ViewType.WEEK else date, category)

        # Only cache successful responses with data
        if events:
            await self.cache.store(key, events, view)
        return EventsResult(data=events, cached=False)
