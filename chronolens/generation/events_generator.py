# chronolens/generation/events_generator.py
from __future__ import annotations
import logging
from datetime import date as date_type
from typing import Any, List, Optional, Union

from chronolens.core.models import THIS_WEEK, Category, HistoricalEvent, HistoricalEventList
from chronolens.generation.prompts import HISTORICAL_EVENTS_TODAY_PROMPT, HISTORICAL_EVENTS_WEEK_PROMPT

logger = logging.getLogger(__name__)


class HistoricalEventsGenerator:
    """Ask the LLM for events on a date (or "This Week") in one category."""

    def __init__(self, llm: Optional[Any] = None) -> None:
        self._llm = llm

    @property
    def llm(self) -> Any:
        if self._llm is None:
            from chronolens.generation.llm_builder import get_llm
            self._llm = get_llm()
        return self._llm

    async def generate(self, date: str, category: Union[Category, str]) -> List[HistoricalEvent]:
        category_name = Category(category).value
        prompt = HISTORICAL_EVENTS_WEEK_PROMPT if date == THIS_WEEK else HISTORICAL_EVENTS_TODAY_PROMPT
        try:
            chain = prompt | self.llm.with_structured_output(HistoricalEventList)
            result = await chain.ainvoke({
                "date": date,
                "category": category_name,
                "today": date_type.today().isoformat(),
            })
        except Exception as e:
            # An empty list lets the caller show partial data and skip caching.
            logger.error(f"Error generating historical events for {category_name} / {date}: {e}", exc_info=True)
            return []

        if not isinstance(result, HistoricalEventList):
            logger.warning(f"Unexpected structured output type: {type(result)}")
            return []
        return result.events
