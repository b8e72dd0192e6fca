"""Place resolver candidate model."""

from pydantic import Field

from backend.tripwhat.models.common import CamelModel, Geo, PriceTier


class PlaceCandidate(CamelModel):
    """One ranked real-world place returned by a resolver."""

    id: str
    display_name: str
    formatted_address: str | None = None
    location: Geo | None = None
    rating: float | None = None
    price_tier: PriceTier = PriceTier.unknown
    types: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    editorial_summary: str | None = None
