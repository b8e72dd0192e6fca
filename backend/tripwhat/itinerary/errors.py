"""User-facing itinerary modification errors.

Every ``ModificationError`` carries a short message and an actionable
suggestion. ``PlaceLookupError`` is deliberately outside that hierarchy: it
reports a resolver transport failure, not a problem with the user's request.
"""


class ModificationError(Exception):
    """Base class for errors the user can fix by rephrasing the request."""

    code = "modification_error"
    default_suggestion = "Please rephrase your request and try again."

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion or self.default_suggestion


class DayNotFound(ModificationError):
    """Requested day number is not part of the itinerary."""

    code = "day_not_found"

    def __init__(self, day: int | None, available: list[int]) -> None:
        self.day = day
        self.available = list(available)
        days = ", ".join(str(d) for d in available) or "none"
        super().__init__(
            f"Day {day} not found in itinerary. Available days: {days}",
            f"Choose one of the available days: {days}.",
        )


class SlotNotFound(ModificationError):
    """Requested time slot does not exist on the day."""

    code = "slot_not_found"

    def __init__(self, slot: str | None, day: int, available: list[str]) -> None:
        self.slot = slot
        self.day = day
        self.available = list(available)
        labels = ", ".join(available) or "none"
        super().__init__(
            f"Time slot {slot} not found in Day {day}. Available: {labels}",
            f"Pick one of the available time slots: {labels}.",
        )


class ActivityNotFound(ModificationError):
    """No activity on the day matches the requested id or name."""

    code = "activity_not_found"

    def __init__(self, subject: str | None, day: int) -> None:
        self.subject = subject
        self.day = day
        super().__init__(
            f'Activity "{subject}" not found in Day {day}',
            f"Check the activity name on Day {day} and try again.",
        )


class PlaceNotFound(ModificationError):
    """The place resolver returned no candidates for the query."""

    code = "place_not_found"

    def __init__(self, subject: str, destination: str) -> None:
        self.subject = subject
        self.destination = destination
        super().__init__(
            f'Could not find "{subject}" in {destination}',
            "Try a more specific place name or a different category.",
        )


class MissingSubject(ModificationError):
    """Neither a place name nor a category was supplied."""

    code = "missing_subject"
    default_suggestion = 'Tell me what to add, e.g. "Add the Louvre to Day 2 morning".'


class MissingTarget(ModificationError):
    """The action lacks the day or time slot needed to locate its target."""

    code = "missing_target"
    default_suggestion = 'Include the day and time, e.g. "Day 2 afternoon".'


class NothingFound(ModificationError):
    """A category search produced no candidates at all."""

    code = "nothing_found"

    def __init__(self, categories: list[str], destination: str) -> None:
        self.categories = list(categories)
        self.destination = destination
        super().__init__(
            f"Could not find {', '.join(categories)} in {destination}",
            "Try a broader category such as museums, parks or restaurants.",
        )


class UnsupportedModification(ModificationError):
    """The requested action kind is not something the engine can apply."""

    code = "unsupported_modification"
    default_suggestion = "You can add, remove, replace, move or modify activities, or add/remove days."


class InvalidAction(ModificationError):
    """A mutation request field has the wrong shape or type."""

    code = "invalid_action"
    default_suggestion = (
        'Check the request: days are whole numbers and time slots are names such as "morning".'
    )


class PlaceLookupError(Exception):
    """Place resolver failed at the transport level (network, HTTP, timeout)."""
