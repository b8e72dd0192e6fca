"""Models package - re-exports for convenience."""

from backend.tripwhat.models.actions import (
    ActionDetails,
    ActionKind,
    ActionTarget,
    ItineraryAction,
)
from backend.tripwhat.models.common import CamelModel, Geo, PriceTier
from backend.tripwhat.models.conversation import (
    ChatMessage,
    ChatResponse,
    Conversation,
    MutationResult,
)
from backend.tripwhat.models.intent import (
    MODIFICATION_INTENTS,
    DateRange,
    DetectedIntent,
    IntentEntities,
    IntentType,
)
from backend.tripwhat.models.itinerary import Activity, ActivityMetadata, Day, Itinerary, TimeSlot
from backend.tripwhat.models.places import PlaceCandidate
from backend.tripwhat.models.tools import ToolCall, ToolCallLog, ToolOutcome

__all__ = [
    # Common
    "CamelModel",
    "Geo",
    "PriceTier",
    # Itinerary
    "Itinerary",
    "Day",
    "TimeSlot",
    "Activity",
    "ActivityMetadata",
    # Actions
    "ItineraryAction",
    "ActionKind",
    "ActionTarget",
    "ActionDetails",
    # Intent
    "DetectedIntent",
    "IntentEntities",
    "IntentType",
    "DateRange",
    "MODIFICATION_INTENTS",
    # Places
    "PlaceCandidate",
    # Conversation
    "ChatMessage",
    "Conversation",
    "MutationResult",
    "ChatResponse",
    # Tools
    "ToolCall",
    "ToolCallLog",
    "ToolOutcome",
]
