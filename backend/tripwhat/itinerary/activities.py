"""Activity construction from resolver candidates."""

import uuid
from datetime import UTC, datetime

from backend.tripwhat.models.actions import ActionDetails
from backend.tripwhat.models.common import PriceTier
from backend.tripwhat.models.itinerary import Activity, ActivityMetadata
from backend.tripwhat.models.places import PlaceCandidate

DEFAULT_DURATION = "1-2h"
DEFAULT_COST = "$10-30"

# (substrings matched against the joined place types, duration estimate), first hit wins
_DURATION_RULES: list[tuple[tuple[str, ...], str]] = [
    (("museum", "gallery"), "2-3h"),
    (("park", "garden"), "1-2h"),
    (("restaurant", "cafe"), "1-1.5h"),
    (("shop", "store"), "1-3h"),
]

_COST_BY_TIER: dict[PriceTier, str] = {
    PriceTier.free: "Free",
    PriceTier.inexpensive: "$10-20",
    PriceTier.moderate: "$20-40",
    PriceTier.expensive: "$40-80",
    PriceTier.very_expensive: "$80+",
    PriceTier.unknown: DEFAULT_COST,
}


def estimate_duration(types: list[str]) -> str:
    """Estimate visit duration from place category tags."""
    if not types:
        return DEFAULT_DURATION

    joined = " ".join(types).lower()
    for needles, duration in _DURATION_RULES:
        if any(needle in joined for needle in needles):
            return duration
    return DEFAULT_DURATION


def estimate_cost(tier: PriceTier | None) -> str:
    """Map the resolver's price signal onto the display cost scale."""
    if tier is None:
        return DEFAULT_COST
    return _COST_BY_TIER.get(tier, DEFAULT_COST)


def new_activity_id() -> str:
    return str(uuid.uuid4())


def activity_from_place(
    place: PlaceCandidate,
    details: ActionDetails | None = None,
    *,
    max_photos: int = 3,
) -> Activity:
    """Build a user-requested Activity from a resolver candidate.

    Args:
        place: Top-ranked candidate from the place resolver
        details: Action details; an explicit ``duration`` overrides the estimate
        max_photos: Number of photo references to keep

    Returns:
        New Activity with a fresh id and user-request metadata
    """
    name = place.display_name or "Unknown Place"
    duration = details.duration if details and details.duration else estimate_duration(place.types)

    return Activity(
        id=new_activity_id(),
        name=name,
        description=place.editorial_summary or f"Visit {name}",
        duration=duration,
        cost=estimate_cost(place.price_tier),
        type=place.types[0] if place.types else "attraction",
        place_id=place.id,
        coordinates=place.location,
        rating=place.rating,
        photos=place.photos[:max_photos],
        address=place.formatted_address,
        metadata=ActivityMetadata(
            added_by="user",
            added_at=datetime.now(UTC),
            source="user_request",
        ),
    )
