"""Itinerary action models - the contract between intent detection and the mutation engine."""

from enum import Enum

from pydantic import Field

from backend.tripwhat.models.common import CamelModel


class ActionKind(str, Enum):
    """Kind of itinerary mutation."""

    add = "add"
    remove = "remove"
    replace = "replace"
    modify = "modify"
    move = "move"


class ActionTarget(CamelModel):
    """Locates the subject of an action."""

    day: int | None = None
    time_slot: str | None = None
    activity_id: str | None = None
    activity_name: str | None = None


class ActionDetails(CamelModel):
    """What to put in place, or where to move to."""

    place_name: str | None = None
    category: list[str] = Field(default_factory=list)
    preferences: list[str] = Field(default_factory=list)
    duration: str | None = None
    time: str | None = None
    new_day: int | None = None
    new_time_slot: str | None = None


class ItineraryAction(CamelModel):
    """Typed command applied by the mutation engine.

    Wire shape: ``{type, target: {day, timeSlot, activityId, activityName},
    details: {placeName, category, preferences, newDay, newTimeSlot}}``.
    """

    kind: ActionKind = Field(..., alias="type")
    target: ActionTarget = Field(default_factory=ActionTarget)
    details: ActionDetails = Field(default_factory=ActionDetails)
