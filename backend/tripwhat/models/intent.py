"""Intent models - classified purpose of a user utterance."""

from enum import Enum

from pydantic import BaseModel, Field


class IntentType(str, Enum):
    """Closed set of intents the classifier may return."""

    search_destination = "search_destination"
    search_attractions = "search_attractions"
    search_hotels = "search_hotels"
    search_flights = "search_flights"
    search_restaurants = "search_restaurants"
    plan_trip = "plan_trip"
    get_details = "get_details"
    find_nearby = "find_nearby"
    calculate_distance = "calculate_distance"
    get_directions = "get_directions"
    web_search = "web_search"
    get_weather = "get_weather"
    convert_currency = "convert_currency"
    estimate_budget = "estimate_budget"
    add_activity = "add_activity"
    remove_activity = "remove_activity"
    replace_activity = "replace_activity"
    modify_activity = "modify_activity"
    move_activity = "move_activity"
    add_day = "add_day"
    remove_day = "remove_day"
    find_and_add = "find_and_add"
    casual_chat = "casual_chat"
    unknown = "unknown"


# Intents that mutate an existing itinerary
MODIFICATION_INTENTS: frozenset[IntentType] = frozenset(
    {
        IntentType.add_activity,
        IntentType.remove_activity,
        IntentType.replace_activity,
        IntentType.modify_activity,
        IntentType.move_activity,
        IntentType.add_day,
        IntentType.remove_day,
        IntentType.find_and_add,
    }
)


class DateRange(BaseModel):
    """Travel dates in ISO format, either end optional."""

    start: str | None = None
    end: str | None = None


class IntentEntities(BaseModel):
    """Slot-like entities extracted from an utterance. Every field is optional."""

    location: str | None = None
    origin: str | None = None
    destination: str | None = None
    dates: DateRange | None = None
    duration: int | None = None
    budget: str | None = None
    number_of_people: int | None = None
    preferences: list[str] | None = None
    category: str | None = None
    query_terms: list[str] | None = None

    # Itinerary targeting
    target_day: int | None = None
    time_slot: str | None = None
    activity_name: str | None = None
    activity_id: str | None = None
    place_name: str | None = None
    action_type: str | None = None
    new_day: int | None = None
    new_time_slot: str | None = None
    # Visit length for a single activity ("3h"); ``duration`` is the trip length in days
    activity_duration: str | None = None

    # Ranked place-category tags from category augmentation
    place_types: list[str] | None = None


class DetectedIntent(BaseModel):
    """Structured classifier output; ``primary_intent`` is the discriminant."""

    primary_intent: IntentType
    entities: IntentEntities = Field(default_factory=IntentEntities)
    tools_to_call: list[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0, le=1)
    reasoning: str = ""

    @property
    def is_modification(self) -> bool:
        return self.primary_intent in MODIFICATION_INTENTS
