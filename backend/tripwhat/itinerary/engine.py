"""Itinerary mutation engine.

Applies one operation to an Itinerary and returns the updated itinerary plus a
human-readable summary. Every operation works on a deep copy of its input, so
the caller's value is never touched: a failure at any step (including the
second half of Replace or Move) leaves the original exactly as it was.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from backend.tripwhat.adapters.places import PlaceResolver
from backend.tripwhat.itinerary.activities import activity_from_place
from backend.tripwhat.itinerary.errors import (
    ActivityNotFound,
    DayNotFound,
    InvalidAction,
    MissingSubject,
    MissingTarget,
    ModificationError,
    NothingFound,
    PlaceLookupError,
    PlaceNotFound,
    SlotNotFound,
    UnsupportedModification,
)
from backend.tripwhat.models.actions import (
    ActionDetails,
    ActionKind,
    ActionTarget,
    ItineraryAction,
)
from backend.tripwhat.models.conversation import MutationResult
from backend.tripwhat.models.itinerary import Activity, Day, Itinerary, TimeSlot
from backend.tripwhat.models.places import PlaceCandidate

logger = logging.getLogger(__name__)

# (display time range, label) for the slots seeded on a new day
DEFAULT_TIME_SLOTS: tuple[tuple[str, str], ...] = (
    ("09:00-12:00", "Morning"),
    ("14:00-18:00", "Afternoon"),
    ("19:00-22:00", "Evening"),
)

_DEFAULT_DAY_TITLE = re.compile(r"^Day \d+$")


def _detach(slot: TimeSlot, activity: Activity) -> None:
    """Remove this exact activity object (not merely an equal one) from the slot."""
    index = next(i for i, a in enumerate(slot.activities) if a is activity)
    del slot.activities[index]


def parse_action(payload: dict[str, Any]) -> ItineraryAction:
    """Validate a raw mutation request.

    Raises:
        UnsupportedModification: ``type`` is missing or not a known action kind
        InvalidAction: Any other field is malformed
    """
    kind = payload.get("type")
    if not isinstance(kind, str) or kind not in {k.value for k in ActionKind}:
        raise UnsupportedModification(f"Unsupported modification type: {kind}")

    try:
        return ItineraryAction.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "request"
        raise InvalidAction(f"Invalid {field}: {first['msg']}") from e


class ItineraryEngine:
    """Stateless mutation engine; the only collaborator is the place resolver."""

    def __init__(
        self,
        resolver: PlaceResolver,
        *,
        find_and_add_limit: int = 3,
        max_photos: int = 3,
    ) -> None:
        self._resolver = resolver
        self._find_and_add_limit = find_and_add_limit
        self._max_photos = max_photos

    async def apply(
        self,
        itinerary: Itinerary,
        action: ItineraryAction,
        destination: str | None = None,
    ) -> MutationResult:
        """Dispatch an action to the matching operation."""
        destination = destination or itinerary.destination

        if action.kind == ActionKind.add:
            return await self.add_activity(itinerary, action, destination)
        if action.kind == ActionKind.remove:
            return self.remove_activity(itinerary, action)
        if action.kind == ActionKind.replace:
            return await self.replace_activity(itinerary, action, destination)
        if action.kind == ActionKind.move:
            return self.move_activity(itinerary, action)
        if action.kind == ActionKind.modify:
            return self.modify_activity(itinerary, action)

        raise UnsupportedModification(f"Unsupported modification type: {action.kind}")

    async def add_activity(
        self, itinerary: Itinerary, action: ItineraryAction, destination: str
    ) -> MutationResult:
        """Resolve a place by name or category and append it to a day's slot."""
        working = itinerary.model_copy(deep=True)
        day, slot = self._locate_slot(working, action.target.day, action.target.time_slot)

        place = await self._resolve_subject(
            action.details, destination, fallback_name=action.target.activity_name
        )
        activity = activity_from_place(place, action.details, max_photos=self._max_photos)
        slot.activities.append(activity)

        logger.info(f"Added {activity.name} ({activity.id}) to Day {day.day_number} {slot.slot_name}")
        return MutationResult(
            itinerary=working,
            message=f"Added {activity.name} to Day {day.day_number} {action.target.time_slot}",
            added=[activity],
        )

    def remove_activity(self, itinerary: Itinerary, action: ItineraryAction) -> MutationResult:
        """Remove the first activity on the day matching the id or name."""
        working = itinerary.model_copy(deep=True)
        day, slot, removed = self._take_activity(working, action.target)

        return MutationResult(
            itinerary=working,
            message=f"Removed {removed.name} from Day {day.day_number} {slot.slot_name}",
            removed=[removed],
        )

    async def replace_activity(
        self, itinerary: Itinerary, action: ItineraryAction, destination: str
    ) -> MutationResult:
        """Remove an activity and add its replacement as one transaction.

        The replacement goes into ``target.time_slot`` when given, otherwise
        into the slot the old activity occupied. If resolving the replacement
        fails, the error propagates and the caller's itinerary keeps the old
        activity.
        """
        working = itinerary.model_copy(deep=True)
        day, source_slot, removed = self._take_activity(working, action.target)

        slot_name = action.target.time_slot or source_slot.slot_name
        _, slot = self._locate_slot(working, day.day_number, slot_name)

        try:
            place = await self._resolve_subject(action.details, destination)
        except (ModificationError, PlaceLookupError) as e:
            logger.warning(f"Replace of {removed.name} on Day {day.day_number} rolled back: {e}")
            raise

        added = activity_from_place(place, action.details, max_photos=self._max_photos)
        slot.activities.append(added)

        return MutationResult(
            itinerary=working,
            message=f"Replaced {removed.name} with {added.name}",
            added=[added],
            removed=[removed],
        )

    def move_activity(self, itinerary: Itinerary, action: ItineraryAction) -> MutationResult:
        """Transfer an activity to another day/slot; total activity count is unchanged."""
        target, details = action.target, action.details
        if target.day is None or details.new_day is None or not details.new_time_slot:
            raise MissingTarget("Source day, target day, and target time slot are required")

        working = itinerary.model_copy(deep=True)
        _, _, moved = self._take_activity(working, target)
        dest_day, dest_slot = self._locate_slot(working, details.new_day, details.new_time_slot)
        dest_slot.activities.append(moved)

        return MutationResult(
            itinerary=working,
            message=(
                f"Moved {moved.name} from Day {target.day} to "
                f"Day {dest_day.day_number} {details.new_time_slot}"
            ),
            moved=[moved],
        )

    def modify_activity(self, itinerary: Itinerary, action: ItineraryAction) -> MutationResult:
        """Override an activity's duration and/or shift it to another slot of the same day."""
        details = action.details
        if not details.duration and not details.time:
            raise UnsupportedModification(
                "Only the duration or time of day of an activity can be modified",
                'Try "Make the Louvre visit 3h" or "Move the museum visit to the afternoon".',
            )

        working = itinerary.model_copy(deep=True)
        day, slot, activity = self._find_activity(working, action.target)
        changes: list[str] = []

        if details.time:
            new_slot = day.find_slot(details.time)
            if new_slot is None:
                raise SlotNotFound(details.time, day.day_number, day.slot_names)
            if new_slot is not slot:
                _detach(slot, activity)
                new_slot.activities.append(activity)
                changes.append(f"moved to {new_slot.slot_name}")

        if details.duration:
            activity.duration = details.duration
            changes.append(f"duration {details.duration}")

        summary = ", ".join(changes) or "no changes"
        return MutationResult(
            itinerary=working,
            message=f"Updated {activity.name} on Day {day.day_number}: {summary}",
            moved=[activity] if any(c.startswith("moved") for c in changes) else [],
        )

    async def find_and_add(
        self,
        itinerary: Itinerary,
        day_number: int | None,
        categories: list[str],
        time_slot: str | None = None,
        destination: str | None = None,
    ) -> MutationResult:
        """Search once by category and spread the top results round-robin over the day's slots."""
        destination = destination or itinerary.destination
        if not categories:
            raise MissingSubject("Category/preferences are required")
        if day_number is None:
            raise MissingTarget("Day is required")

        working = itinerary.model_copy(deep=True)
        day = self._locate_day(working, day_number)

        if time_slot:
            _, slot = self._locate_slot(working, day_number, time_slot)
            slots = [slot]
        else:
            slots = list(day.time_slots)
        if not slots:
            raise SlotNotFound(time_slot, day_number, day.slot_names)

        places = await self._search(" ".join(categories), destination)
        if not places:
            raise NothingFound(categories, destination)

        added: list[Activity] = []
        # Resolver order is the ranking; no re-sorting here
        for index, place in enumerate(places[: self._find_and_add_limit]):
            activity = activity_from_place(place, max_photos=self._max_photos)
            slots[index % len(slots)].activities.append(activity)
            added.append(activity)

        return MutationResult(
            itinerary=working,
            message=f"Added {len(added)} {'/'.join(categories)} activities to Day {day_number}",
            added=added,
        )

    def add_day(self, itinerary: Itinerary) -> MutationResult:
        """Append an empty day with morning/afternoon/evening slots."""
        working = itinerary.model_copy(deep=True)
        day_number = len(working.days) + 1

        working.days.append(
            Day(
                day_number=day_number,
                title=f"Day {day_number}",
                time_slots=[TimeSlot(time=time, label=label) for time, label in DEFAULT_TIME_SLOTS],
            )
        )
        working.duration = len(working.days)

        return MutationResult(itinerary=working, message=f"Added Day {day_number} to your itinerary")

    def remove_day(self, itinerary: Itinerary, day_number: int | None) -> MutationResult:
        """Delete a day and renumber the rest to 1..n."""
        if day_number is None:
            raise MissingTarget("Which day would you like to remove?")

        working = itinerary.model_copy(deep=True)
        index = next(
            (i for i, day in enumerate(working.days) if day.day_number == day_number), None
        )
        if index is None:
            raise DayNotFound(day_number, working.day_numbers)

        removed = working.days.pop(index)
        for new_number, day in enumerate(working.days, start=1):
            if _DEFAULT_DAY_TITLE.match(day.title):
                day.title = f"Day {new_number}"
            day.day_number = new_number
        working.duration = len(working.days)

        return MutationResult(
            itinerary=working,
            message=f"Removed Day {day_number} from your itinerary",
            removed=[a for slot in removed.time_slots for a in slot.activities],
        )

    # Lookup helpers

    def _locate_day(self, itinerary: Itinerary, day_number: int | None) -> Day:
        if day_number is None:
            raise MissingTarget("Day is required")
        day = itinerary.find_day(day_number)
        if day is None:
            raise DayNotFound(day_number, itinerary.day_numbers)
        return day

    def _locate_slot(
        self, itinerary: Itinerary, day_number: int | None, slot_name: str | None
    ) -> tuple[Day, TimeSlot]:
        if day_number is None or not slot_name:
            raise MissingTarget("Day and time slot are required")
        day = self._locate_day(itinerary, day_number)
        slot = day.find_slot(slot_name)
        if slot is None:
            raise SlotNotFound(slot_name, day.day_number, day.slot_names)
        return day, slot

    def _find_activity(
        self, itinerary: Itinerary, target: ActionTarget
    ) -> tuple[Day, TimeSlot, Activity]:
        """First match in slot order, then activity order: exact id, else name substring."""
        day = self._locate_day(itinerary, target.day)
        if not target.activity_id and not target.activity_name:
            raise MissingSubject("Tell me which activity you mean")

        needle = (target.activity_name or "").lower()
        for slot in day.time_slots:
            for activity in slot.activities:
                if target.activity_id:
                    if activity.id == target.activity_id:
                        return day, slot, activity
                elif needle in activity.name.lower():
                    return day, slot, activity

        raise ActivityNotFound(target.activity_name or target.activity_id, day.day_number)

    def _take_activity(
        self, itinerary: Itinerary, target: ActionTarget
    ) -> tuple[Day, TimeSlot, Activity]:
        day, slot, activity = self._find_activity(itinerary, target)
        _detach(slot, activity)
        return day, slot, activity

    # Resolver helpers

    async def _search(self, subject: str, destination: str) -> list[PlaceCandidate]:
        query = f"{subject} in {destination}"
        logger.info(f"Searching places: {query!r}")
        try:
            return await self._resolver.search(query)
        except Exception as e:
            logger.error(f"Place lookup failed for {query!r}: {e}", exc_info=True)
            raise PlaceLookupError(f"Place lookup failed for {query!r}") from e

    async def _resolve_subject(
        self,
        details: ActionDetails,
        destination: str,
        fallback_name: str | None = None,
    ) -> PlaceCandidate:
        """Top-ranked candidate for the explicit place name, else for the categories."""
        name = details.place_name or fallback_name
        if name:
            places = await self._search(name, destination)
            if not places:
                raise PlaceNotFound(name, destination)
            return places[0]

        if details.category:
            places = await self._search(" ".join(details.category), destination)
            if not places:
                raise PlaceNotFound(", ".join(details.category), destination)
            return places[0]

        raise MissingSubject("Either place name or category is required")
