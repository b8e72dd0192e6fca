"""Deterministic keyword classifier used when the model path is unavailable.

Rules are checked in order against the lowercased query and the first match
wins. The checks overlap, so the order is part of the contract: "add museums
but first plan the trip" must not be an add (rule 1 excludes "plan") and falls
through to plan_trip.
"""

import re
from dataclasses import dataclass, field

from backend.tripwhat.intent.catalog import CategoryCatalog
from backend.tripwhat.models.intent import DetectedIntent, IntentEntities, IntentType

FALLBACK_CONFIDENCE = 0.6
FALLBACK_REASONING = "Fallback keyword-based detection"

_DAY_NUMBER = re.compile(r"\bday\s*(\d+)")
_TIME_SLOT = re.compile(r"\b(morning|afternoon|evening)\b")


@dataclass(frozen=True)
class FallbackRule:
    """Matches when any of ``any_of`` occurs, plus one of ``also_any_of`` if given,
    and none of ``none_of``."""

    intent: IntentType
    any_of: tuple[str, ...]
    also_any_of: tuple[str, ...] = ()
    none_of: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    category: str | None = None

    def matches(self, query: str) -> bool:
        if not any(term in query for term in self.any_of):
            return False
        if self.also_any_of and not any(term in query for term in self.also_any_of):
            return False
        return not any(term in query for term in self.none_of)


FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule(IntentType.add_activity, ("add", "include"), none_of=("plan",)),
    FallbackRule(IntentType.remove_activity, ("remove", "delete", "take out")),
    FallbackRule(IntentType.replace_activity, ("replace", "swap", "change to")),
    FallbackRule(IntentType.move_activity, ("move",), also_any_of=("day", "time")),
    FallbackRule(IntentType.modify_activity, ("modify", "adjust", "update")),
    FallbackRule(
        IntentType.search_hotels, ("hotel", "accommodation", "stay"), tools=("search_hotels",)
    ),
    FallbackRule(IntentType.search_flights, ("flight", "fly"), tools=("search_flights",)),
    FallbackRule(
        IntentType.search_restaurants,
        ("restaurant", "food", "eat"),
        tools=("search_restaurants", "search_attractions"),
    ),
    FallbackRule(
        IntentType.plan_trip,
        ("plan",),
        also_any_of=("trip",),
        tools=("search_destinations", "search_attractions", "search_hotels", "search_restaurants"),
    ),
    FallbackRule(IntentType.get_weather, ("weather",), tools=("get_weather",)),
    FallbackRule(
        IntentType.calculate_distance, ("distance", "how far"), tools=("calculate_distance",)
    ),
    FallbackRule(IntentType.find_nearby, ("nearby", "near"), tools=("get_nearby_attractions",)),
    FallbackRule(
        IntentType.search_attractions, ("museum",), tools=("search_attractions",), category="museums"
    ),
    FallbackRule(
        IntentType.search_attractions, ("beach",), tools=("search_attractions",), category="beach"
    ),
    FallbackRule(
        IntentType.search_attractions, ("park",), tools=("search_attractions",), category="parks"
    ),
    FallbackRule(
        IntentType.search_attractions,
        ("search", "find", "show"),
        tools=("search_attractions", "search_destinations"),
    ),
)


def match_rule(
    query: str, rules: tuple[FallbackRule, ...] = FALLBACK_RULES
) -> FallbackRule | None:
    """First rule matching the query, or None for casual chat."""
    lowered = query.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return None


def extract_entities(query: str, rule: FallbackRule | None) -> IntentEntities:
    """Best-effort entities: query terms, day numbers, time slot, category hint."""
    lowered = query.lower()
    days = [int(d) for d in _DAY_NUMBER.findall(lowered)]
    slot_match = _TIME_SLOT.search(lowered)
    slot = slot_match.group(1) if slot_match else None

    entities = IntentEntities(
        query_terms=[word for word in query.split(" ") if len(word) > 3],
        target_day=days[0] if days else None,
        time_slot=slot,
        category=rule.category if rule else None,
    )

    if rule is not None and rule.intent == IntentType.move_activity:
        entities.new_day = days[1] if len(days) > 1 else None
        entities.new_time_slot = slot
    return entities


@dataclass
class FallbackClassifier:
    """Pure rule-based classifier; never touches the network."""

    catalog: CategoryCatalog | None = None
    confidence: float = FALLBACK_CONFIDENCE
    rules: tuple[FallbackRule, ...] = field(default=FALLBACK_RULES)

    def classify(self, query: str) -> DetectedIntent:
        rule = match_rule(query, self.rules)
        entities = extract_entities(query, rule)

        if rule is not None and rule.category and self.catalog is not None:
            entities.place_types = self.catalog.types_for_category(rule.category) or None

        return DetectedIntent(
            primary_intent=rule.intent if rule else IntentType.casual_chat,
            entities=entities,
            tools_to_call=list(rule.tools) if rule else [],
            confidence=self.confidence,
            reasoning=FALLBACK_REASONING,
        )


def fallback_detection(
    query: str,
    catalog: CategoryCatalog | None = None,
    confidence: float = FALLBACK_CONFIDENCE,
) -> DetectedIntent:
    """Classify with the default rule table."""
    return FallbackClassifier(catalog=catalog, confidence=confidence).classify(query)
