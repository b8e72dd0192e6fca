"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from backend.tripwhat.intent.catalog import CategoryCatalog
from backend.tripwhat.models.common import Geo, PriceTier
from backend.tripwhat.models.itinerary import Activity, ActivityMetadata, Day, Itinerary, TimeSlot
from backend.tripwhat.models.places import PlaceCandidate

GENERATED_AT = datetime(2025, 6, 1, 9, 0, tzinfo=UTC)


class FakeResolver:
    """Place resolver returning canned candidates by query substring.

    Records every query; raises ``error`` instead when it is set.
    """

    def __init__(self) -> None:
        self.results: dict[str, list[PlaceCandidate]] = {}
        self.queries: list[str] = []
        self.error: Exception | None = None

    async def search(self, query: str) -> list[PlaceCandidate]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        for key, places in self.results.items():
            if key.lower() in query.lower():
                return list(places)
        return []


class ScriptedLLM:
    """Completion client replaying scripted responses in order.

    An Exception entry is raised instead of returned. Once the script runs
    out, every call returns an empty string.
    """

    def __init__(self, responses: list[str | Exception] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[tuple[str, str | None]] = []

    async def complete(self, prompt: str, *, system: str | None = None) -> str:
        self.calls.append((prompt, system))
        if not self.responses:
            return ""
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_place(
    place_id: str,
    name: str,
    types: list[str] | None = None,
    price_tier: PriceTier = PriceTier.unknown,
) -> PlaceCandidate:
    return PlaceCandidate(
        id=place_id,
        display_name=name,
        formatted_address=f"{name}, Paris, France",
        location=Geo(lat=48.85, lon=2.35),
        rating=4.5,
        price_tier=price_tier,
        types=types or ["tourist_attraction"],
        photos=[f"places/{place_id}/photos/{i}" for i in range(1, 5)],
    )


def make_activity(activity_id: str, name: str, kind: str = "attraction") -> Activity:
    return Activity(
        id=activity_id,
        name=name,
        type=kind,
        metadata=ActivityMetadata(added_by="ai", added_at=GENERATED_AT, source="generated"),
    )


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def scripted_llm() -> Callable[..., ScriptedLLM]:
    """Factory: ``scripted_llm(["{...}", RuntimeError()])``."""
    return lambda responses=None: ScriptedLLM(responses)


@pytest.fixture
def catalog() -> CategoryCatalog:
    return CategoryCatalog.load()


@pytest.fixture
def sample_itinerary() -> Itinerary:
    """Three-day Paris itinerary.

    Day 1 uses slot labels, Day 2 uses the older ``period`` field only, and
    Day 3 has a custom title.
    """
    return Itinerary(
        destination="Paris",
        duration=3,
        days=[
            Day(
                day_number=1,
                title="Day 1",
                time_slots=[
                    TimeSlot(
                        time="09:00-12:00",
                        label="Morning",
                        activities=[make_activity("act_eiffel", "Eiffel Tower")],
                    ),
                    TimeSlot(
                        time="14:00-18:00",
                        label="Afternoon",
                        activities=[make_activity("act_orsay", "Musée d'Orsay", "museum")],
                    ),
                    TimeSlot(
                        time="19:00-22:00",
                        label="Evening",
                        activities=[make_activity("act_dinner", "Le Comptoir", "restaurant")],
                    ),
                ],
            ),
            Day(
                day_number=2,
                title="Day 2",
                time_slots=[
                    TimeSlot(time="09:00-12:00", period="morning"),
                    TimeSlot(time="14:00-18:00", period="afternoon"),
                    TimeSlot(time="19:00-22:00", period="evening"),
                ],
            ),
            Day(
                day_number=3,
                title="Versailles",
                time_slots=[
                    TimeSlot(
                        time="09:00-12:00",
                        label="Morning",
                        activities=[make_activity("act_versailles", "Palace of Versailles")],
                    ),
                    TimeSlot(time="14:00-18:00", label="Afternoon"),
                ],
            ),
        ],
    )


@pytest.fixture
def place_factory() -> Callable[..., PlaceCandidate]:
    """Factory: ``place_factory("p1", "Louvre Museum", ["museum"], PriceTier.moderate)``."""
    return make_place
