"""General conversational path for messages that are not itinerary edits."""

from typing import Protocol

from backend.tripwhat.models.conversation import Conversation
from backend.tripwhat.models.intent import DetectedIntent, IntentType
from backend.tripwhat.models.tools import ToolOutcome

NO_ITINERARY_MESSAGE = (
    "You don't have an itinerary yet, so there is nothing to change. "
    'Ask me to plan a trip first (for example: "Plan a 3-day trip to Paris"), '
    "then I can add, remove, replace or move activities for you."
)

GREETING_MESSAGE = (
    "I can help you explore destinations, find attractions, restaurants and hotels, "
    "and edit your itinerary day by day. What would you like to do?"
)

_TOOL_HEADINGS = {
    "search_attractions": "Things to see",
    "search_restaurants": "Places to eat",
    "search_hotels": "Places to stay",
    "search_destinations": "Destinations",
    "get_nearby_attractions": "Nearby",
}

_MAX_LISTED = 5


class ChatHandler(Protocol):
    """Produces the reply text for non-modification messages."""

    async def respond(
        self,
        conversation: Conversation,
        query: str,
        intent: DetectedIntent,
        tool_outcomes: list[ToolOutcome],
    ) -> str:
        ...


def modification_help(intent: DetectedIntent) -> str:
    """Explain what a modification request needs, tailored to what was understood."""
    entities = intent.entities

    if intent.primary_intent == IntentType.add_activity:
        if entities.place_name:
            return (
                f"I can help you add {entities.place_name} to your itinerary! "
                "To do this, I'll need to know:\n\n"
                "1. Which day would you like to add it to?\n"
                "2. What time of day? (morning, afternoon, or evening)\n\n"
                f'For example, you could say: "Add {entities.place_name} to Day 2 morning"'
            )
        return (
            "I can help you add activities to your itinerary! Please specify:\n\n"
            "1. What would you like to add?\n"
            "2. Which day?\n"
            "3. What time? (morning, afternoon, or evening)\n\n"
            'For example: "Add the Eiffel Tower to Day 2 morning"'
        )

    if intent.primary_intent == IntentType.remove_activity:
        if entities.activity_name:
            day = (
                f"From Day {entities.target_day}?" if entities.target_day else "Which day is it on?"
            )
            return f"I can remove {entities.activity_name} from your itinerary. {day}"
        return (
            "I can help you remove activities! Please tell me:\n\n"
            "1. Which activity to remove?\n"
            "2. Which day is it on?\n\n"
            'For example: "Remove the museum visit from Day 1"'
        )

    if intent.primary_intent == IntentType.replace_activity:
        return (
            "I can help you replace activities! Please tell me:\n\n"
            "1. What activity do you want to replace?\n"
            "2. Which day is it on?\n"
            "3. What should I replace it with?\n\n"
            'For example: "Replace the shopping on Day 2 with a museum visit"'
        )

    if intent.primary_intent == IntentType.move_activity:
        return (
            "I can move activities between days! Please tell me:\n\n"
            "1. Which activity to move?\n"
            "2. From which day?\n"
            "3. To which day and time?\n\n"
            'For example: "Move the Louvre from Day 1 to Day 2 afternoon"'
        )

    if intent.primary_intent == IntentType.find_and_add:
        if entities.preferences:
            where = (
                f"I'll add them to Day {entities.target_day}. "
                if entities.target_day
                else "Which day would you like these on? "
            )
            return (
                f"Great! I can find {' and '.join(entities.preferences)} activities for you. "
                f"{where}Let me search for the best options!"
            )
        return (
            "Tell me what kind of places you'd like and which day, "
            'for example: "Add some museums to Day 3"'
        )

    return 'I can update your itinerary. Try something like "Add the Louvre to Day 1 morning".'


def summarize_outcomes(outcomes: list[ToolOutcome]) -> str:
    """Readable summary of tool results; failed tools are mentioned, not hidden."""
    sections: list[str] = []
    for outcome in outcomes:
        heading = _TOOL_HEADINGS.get(outcome.name, outcome.name.replace("_", " ").capitalize())
        if not outcome.success:
            sections.append(f"{heading}: I couldn't get results right now.")
            continue

        places = outcome.value if isinstance(outcome.value, list) else []
        if not places:
            sections.append(f"{heading}: nothing matched.")
            continue

        lines = [f"{heading}:"]
        for place in places[:_MAX_LISTED]:
            name = place.get("displayName", "Unknown place") if isinstance(place, dict) else str(place)
            rating = place.get("rating") if isinstance(place, dict) else None
            lines.append(f"- {name} ({rating})" if rating else f"- {name}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


class GuidanceChatHandler:
    """Deterministic replies: guidance for edits without an itinerary, tool summaries otherwise."""

    async def respond(
        self,
        conversation: Conversation,
        query: str,
        intent: DetectedIntent,
        tool_outcomes: list[ToolOutcome],
    ) -> str:
        if intent.is_modification and conversation.itinerary is None:
            return f"{NO_ITINERARY_MESSAGE}\n\n{modification_help(intent)}"

        if tool_outcomes:
            return summarize_outcomes(tool_outcomes)

        return GREETING_MESSAGE
