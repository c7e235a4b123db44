import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure project root is on sys.path for imports like `chronolens.*` and `config.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from chronolens.core.models import HistoricalEvent  # noqa: E402

# Friday
T0 = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)

    def set(self, now: datetime) -> None:
        self.now = now


def make_event(title="Launch of Sputnik", date="1957-10-04", category="Science"):
    return HistoricalEvent(
        title=title,
        date=date,
        description="The Soviet Union launched the first artificial satellite into orbit.",
        category=category,
        source="https://en.wikipedia.org/wiki/Sputnik_1",
    )


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def events():
    return [
        make_event(),
        make_event(title="First flight of the Wright Flyer", date="1903-12-17", category="Technology"),
    ]
