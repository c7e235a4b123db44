import pytest

from chronolens.core.backends import MemoryCacheBackend
from chronolens.core.cache import EventsCache
from chronolens.core.models import THIS_WEEK, Category, HistoricalEventList, ViewType
from chronolens.core.ttl import TTLPolicy
from chronolens.generation.events_generator import HistoricalEventsGenerator
from chronolens.services.events_service import HistoricalEventsService


class FakeGenerator:
    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    async def generate(self, date, category):
        self.calls.append((date, category))
        return self.results.pop(0)


class FakeLLM:
    """Stands in for a chat model; structured output is a plain callable."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.prompts = []
        self.schemas = []

    def with_structured_output(self, schema):
        self.schemas.append(schema)

        def respond(prompt_value):
            self.prompts.append(prompt_value.to_string())
            if isinstance(self.outcome, Exception):
                raise self.outcome
            return self.outcome

        return respond


@pytest.fixture
def cache(clock):
    return EventsCache(MemoryCacheBackend(clock=clock), TTLPolicy(clock=clock))


@pytest.mark.asyncio
async def test_miss_generates_and_caches(cache, events):
    generator = FakeGenerator([events])
    service = HistoricalEventsService(cache=cache, generator=generator)

    first = await service.get_events("2024-03-01", Category.SCIENCE, "today")
    second = await service.get_events("2024-03-01", Category.SCIENCE, "today")

    assert first.cached is False
    assert first.data == events
    assert second.cached is True
    assert second.data == events
    assert generator.calls == [("2024-03-01", Category.SCIENCE)]

    snapshot = await cache.stats_snapshot()
    assert (snapshot["hits"], snapshot["misses"]) == (1, 1)


@pytest.mark.asyncio
async def test_week_view_asks_for_this_week(cache, events):
    generator = FakeGenerator([events])
    service = HistoricalEventsService(cache=cache, generator=generator)

    await service.get_events("2024-03-01", "Art", ViewType.WEEK)

    assert generator.calls == [(THIS_WEEK, "Art")]
    assert await cache.has_valid("chronolens_events_week_Art_2024-03-01")


@pytest.mark.asyncio
async def test_empty_generation_is_not_cached(cache, events):
    generator = FakeGenerator([[], events])
    service = HistoricalEventsService(cache=cache, generator=generator)

    first = await service.get_events("2024-03-01", "Politics", "today")
    second = await service.get_events("2024-03-01", "Politics", "today")

    assert first.data == []
    assert second.cached is False
    assert second.data == events
    assert len(generator.calls) == 2


@pytest.mark.asyncio
async def test_generator_returns_structured_events(events):
    llm = FakeLLM(HistoricalEventList(events=events))
    generator = HistoricalEventsGenerator(llm=llm)

    result = await generator.generate("2024-03-01", "Science")

    assert result == events
    assert llm.schemas == [HistoricalEventList]
    assert "2024-03-01" in llm.prompts[0]
    assert "historian specializing in Science" in llm.prompts[0]


@pytest.mark.asyncio
async def test_generator_uses_week_prompt_for_this_week(events):
    llm = FakeLLM(HistoricalEventList(events=events))
    await HistoricalEventsGenerator(llm=llm).generate(THIS_WEEK, Category.TECHNOLOGY)
    assert "calendar week" in llm.prompts[0]


@pytest.mark.asyncio
async def test_generator_failure_yields_empty_list():
    llm = FakeLLM(RuntimeError("quota exceeded"))
    assert await HistoricalEventsGenerator(llm=llm).generate("2024-03-01", "Art") == []


@pytest.mark.asyncio
async def test_generator_ignores_unexpected_output():
    llm = FakeLLM({"events": "nope"})
    assert await HistoricalEventsGenerator(llm=llm).generate("2024-03-01", "Art") == []
