"""Tests for day-level operations: add_day, remove_day and find_and_add."""

import pytest

from backend.tripwhat.itinerary.engine import ItineraryEngine
from backend.tripwhat.itinerary.errors import (
    DayNotFound,
    MissingSubject,
    MissingTarget,
    NothingFound,
    SlotNotFound,
)
from backend.tripwhat.models.common import PriceTier
from backend.tripwhat.models.itinerary import Itinerary


@pytest.fixture
def engine(fake_resolver) -> ItineraryEngine:
    return ItineraryEngine(fake_resolver)


@pytest.fixture
def five_museums(fake_resolver, place_factory) -> list[str]:
    names = ["Louvre Museum", "Musée d'Orsay", "Centre Pompidou", "Musée Rodin", "Musée Picasso"]
    fake_resolver.results["museum"] = [
        place_factory(f"p_{i}", name, ["museum"], PriceTier.moderate) for i, name in enumerate(names)
    ]
    return names


class TestAddDay:
    def test_appends_numbered_day_with_default_slots(
        self, engine: ItineraryEngine, sample_itinerary: Itinerary
    ) -> None:
        result = engine.add_day(sample_itinerary)

        new_day = result.itinerary.days[-1]
        assert new_day.day_number == 4
        assert new_day.title == "Day 4"
        assert [(s.time, s.label) for s in new_day.time_slots] == [
            ("09:00-12:00", "Morning"),
            ("14:00-18:00", "Afternoon"),
            ("19:00-22:00", "Evening"),
        ]
        assert all(s.activities == [] for s in new_day.time_slots)
        assert result.itinerary.duration == 4
        assert result.message == "Added Day 4 to your itinerary"

    def test_duration_tracks_days_on_empty_itinerary(self, engine: ItineraryEngine) -> None:
        result = engine.add_day(Itinerary(destination="Rome", duration=0))

        assert result.itinerary.duration == len(result.itinerary.days) == 1
        assert result.itinerary.days[0].day_number == 1


class TestRemoveDay:
    def test_renumbers_without_gaps(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        result = engine.remove_day(sample_itinerary, 1)

        assert result.itinerary.day_numbers == [1, 2]
        assert result.itinerary.duration == 2
        assert result.message == "Removed Day 1 from your itinerary"
        assert [a.id for a in result.removed] == ["act_eiffel", "act_orsay", "act_dinner"]

    def test_default_titles_follow_numbers_custom_titles_kept(
        self, engine: ItineraryEngine, sample_itinerary: Itinerary
    ) -> None:
        result = engine.remove_day(sample_itinerary, 1)

        assert [d.title for d in result.itinerary.days] == ["Day 1", "Versailles"]

    def test_remove_last_day(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        result = engine.remove_day(sample_itinerary, 3)

        assert result.itinerary.day_numbers == [1, 2]
        assert result.itinerary.days[1].title == "Day 2"

    def test_out_of_range(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        with pytest.raises(DayNotFound) as exc_info:
            engine.remove_day(sample_itinerary, 4)

        assert exc_info.value.available == [1, 2, 3]

    def test_missing_day(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        with pytest.raises(MissingTarget):
            engine.remove_day(sample_itinerary, None)

    def test_input_unchanged(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        before = sample_itinerary.model_copy(deep=True)

        engine.remove_day(sample_itinerary, 2)

        assert sample_itinerary == before


class TestFindAndAdd:
    @pytest.mark.asyncio
    async def test_top_three_round_robin_in_resolver_order(
        self, engine: ItineraryEngine, fake_resolver, five_museums, sample_itinerary: Itinerary
    ) -> None:
        result = await engine.find_and_add(sample_itinerary, 2, ["museum"])

        day = result.itinerary.days[1]
        assert [[a.name for a in s.activities] for s in day.time_slots] == [
            ["Louvre Museum"],
            ["Musée d'Orsay"],
            ["Centre Pompidou"],
        ]
        assert len(result.added) == 3
        assert result.message == "Added 3 museum activities to Day 2"
        assert fake_resolver.queries == ["museum in Paris"]

    @pytest.mark.asyncio
    async def test_single_slot_takes_all(
        self, engine: ItineraryEngine, five_museums, sample_itinerary: Itinerary
    ) -> None:
        result = await engine.find_and_add(sample_itinerary, 2, ["museum"], "afternoon")

        day = result.itinerary.days[1]
        assert [a.name for a in day.time_slots[1].activities] == five_museums[:3]
        assert day.time_slots[0].activities == []

    @pytest.mark.asyncio
    async def test_cycles_when_more_results_than_slots(
        self, fake_resolver, five_museums, sample_itinerary: Itinerary
    ) -> None:
        wide = ItineraryEngine(fake_resolver, find_and_add_limit=5)

        result = await wide.find_and_add(sample_itinerary, 3, ["museum"])

        morning, afternoon = result.itinerary.days[2].time_slots
        assert [a.name for a in morning.activities] == [
            "Palace of Versailles",
            "Louvre Museum",
            "Centre Pompidou",
            "Musée Picasso",
        ]
        assert [a.name for a in afternoon.activities] == ["Musée d'Orsay", "Musée Rodin"]

    @pytest.mark.asyncio
    async def test_fewer_results_than_limit(
        self, engine: ItineraryEngine, fake_resolver, place_factory, sample_itinerary: Itinerary
    ) -> None:
        fake_resolver.results["park"] = [place_factory("p_lux", "Jardin du Luxembourg", ["park"])]

        result = await engine.find_and_add(sample_itinerary, 2, ["park", "garden"])

        assert len(result.added) == 1
        assert result.message == "Added 1 park/garden activities to Day 2"

    @pytest.mark.asyncio
    async def test_nothing_found(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        before = sample_itinerary.model_copy(deep=True)

        with pytest.raises(NothingFound):
            await engine.find_and_add(sample_itinerary, 2, ["volcano"])

        assert sample_itinerary == before

    @pytest.mark.asyncio
    async def test_requires_categories(
        self, engine: ItineraryEngine, sample_itinerary: Itinerary
    ) -> None:
        with pytest.raises(MissingSubject):
            await engine.find_and_add(sample_itinerary, 2, [])

    @pytest.mark.asyncio
    async def test_requires_day(self, engine: ItineraryEngine, sample_itinerary: Itinerary) -> None:
        with pytest.raises(MissingTarget):
            await engine.find_and_add(sample_itinerary, None, ["museum"])

    @pytest.mark.asyncio
    async def test_unknown_slot(
        self, engine: ItineraryEngine, fake_resolver, five_museums, sample_itinerary: Itinerary
    ) -> None:
        with pytest.raises(SlotNotFound):
            await engine.find_and_add(sample_itinerary, 3, ["museum"], "evening")
        assert fake_resolver.queries == []
