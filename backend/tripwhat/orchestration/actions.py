"""Translation from classifier output to engine actions."""

from backend.tripwhat.itinerary.errors import UnsupportedModification
from backend.tripwhat.models.actions import ActionDetails, ActionKind, ActionTarget, ItineraryAction
from backend.tripwhat.models.intent import DetectedIntent, IntentEntities, IntentType

_ACTION_KINDS: dict[IntentType, ActionKind] = {
    IntentType.add_activity: ActionKind.add,
    IntentType.remove_activity: ActionKind.remove,
    IntentType.replace_activity: ActionKind.replace,
    IntentType.modify_activity: ActionKind.modify,
    IntentType.move_activity: ActionKind.move,
}


def categories_from(entities: IntentEntities) -> list[str]:
    """Category list for a search: the category entity, else the stated preferences."""
    if entities.category:
        return [entities.category]
    return list(entities.preferences or [])


def build_action(intent: DetectedIntent) -> ItineraryAction:
    """Build the engine action for an activity-level modification intent.

    Day-level intents (add_day, remove_day, find_and_add) have dedicated engine
    operations and are not expressible as an ItineraryAction.

    Raises:
        UnsupportedModification: Intent has no activity-level action
    """
    kind = _ACTION_KINDS.get(intent.primary_intent)
    if kind is None:
        raise UnsupportedModification(
            f"Unsupported modification type: {intent.primary_intent.value}"
        )

    entities = intent.entities
    target = ActionTarget(
        day=entities.target_day,
        time_slot=entities.time_slot,
        activity_id=entities.activity_id,
        activity_name=entities.activity_name,
    )
    details = ActionDetails(preferences=list(entities.preferences or []))

    if kind == ActionKind.add:
        details.place_name = entities.place_name or entities.activity_name
        if entities.category:
            details.category = [entities.category]
        # Add has no existing subject to locate
        target.activity_name = None
        target.activity_id = None
    elif kind == ActionKind.remove:
        target.activity_name = entities.activity_name or entities.place_name
    elif kind == ActionKind.replace:
        details.place_name = entities.place_name
        if entities.category:
            details.category = [entities.category]
    elif kind == ActionKind.move:
        target.activity_name = entities.activity_name or entities.place_name
        details.new_day = entities.new_day
        details.new_time_slot = entities.new_time_slot or entities.time_slot
        target.time_slot = None
    elif kind == ActionKind.modify:
        target.activity_name = entities.activity_name or entities.place_name
        details.time = entities.new_time_slot
        details.duration = entities.activity_duration

    return ItineraryAction(kind=kind, target=target, details=details)
