"""Itinerary models - the day/time-slot/activity hierarchy edited in conversation."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from backend.tripwhat.models.common import CamelModel, Geo


class ActivityMetadata(CamelModel):
    """Who added an activity and when."""

    added_by: Literal["ai", "user"] = "ai"
    added_at: datetime
    source: Literal["generated", "user_request", "suggestion"] = "generated"


class Activity(CamelModel):
    """Single visitable item owned by exactly one time slot."""

    id: str
    name: str
    description: str = ""
    duration: str = "1-2h"
    cost: str = "$10-30"
    type: str = "attraction"
    place_id: str | None = None
    coordinates: Geo | None = None
    rating: float | None = None
    photos: list[str] = Field(default_factory=list)
    address: str | None = None
    metadata: ActivityMetadata | None = None


class TimeSlot(CamelModel):
    """A period of a day holding an ordered sequence of activities.

    Older documents name the period with ``period`` instead of ``label``;
    both are accepted and treated as synonyms when locating a slot.
    """

    time: str = ""
    label: str | None = None
    period: str | None = None
    activities: list[Activity] = Field(default_factory=list)

    @property
    def slot_name(self) -> str:
        """Display name of the slot, whichever synonym field carries it."""
        return self.label or self.period or ""

    def matches(self, name: str) -> bool:
        """Case-insensitive match against the slot label or period."""
        return self.slot_name.lower() == name.strip().lower()


class Day(CamelModel):
    """One numbered day of a trip."""

    day_number: int = Field(..., ge=1)
    title: str = ""
    time_slots: list[TimeSlot] = Field(default_factory=list)

    def find_slot(self, name: str) -> TimeSlot | None:
        """Locate a slot by label or period, ignoring case."""
        for slot in self.time_slots:
            if slot.matches(name):
                return slot
        return None

    @property
    def slot_names(self) -> list[str]:
        return [slot.slot_name for slot in self.time_slots]


class Itinerary(CamelModel):
    """Complete multi-day itinerary for one destination."""

    destination: str
    duration: int = Field(..., ge=0)
    days: list[Day] = Field(default_factory=list)

    def find_day(self, day_number: int) -> Day | None:
        for day in self.days:
            if day.day_number == day_number:
                return day
        return None

    @property
    def day_numbers(self) -> list[int]:
        return [day.day_number for day in self.days]

    def activity_count(self) -> int:
        """Total number of activities across all days and slots."""
        return sum(len(slot.activities) for day in self.days for slot in day.time_slots)
