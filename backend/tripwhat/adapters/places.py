"""Place resolver contract and the Google Places (New) text-search adapter."""

import logging
from typing import Any, Protocol

import httpx

from backend.tripwhat.adapters.fixtures import FixturePlaceResolver
from backend.tripwhat.config import Settings
from backend.tripwhat.models.common import Geo, PriceTier
from backend.tripwhat.models.places import PlaceCandidate

logger = logging.getLogger(__name__)

_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.rating",
        "places.priceLevel",
        "places.photos",
        "places.editorialSummary",
        "places.types",
    ]
)

_PRICE_LEVELS: dict[str, PriceTier] = {
    "PRICE_LEVEL_FREE": PriceTier.free,
    "PRICE_LEVEL_INEXPENSIVE": PriceTier.inexpensive,
    "PRICE_LEVEL_MODERATE": PriceTier.moderate,
    "PRICE_LEVEL_EXPENSIVE": PriceTier.expensive,
    "PRICE_LEVEL_VERY_EXPENSIVE": PriceTier.very_expensive,
}


class PlaceResolver(Protocol):
    """Returns ranked candidates (most relevant first) for a free-text query.

    An empty list is a valid answer, not an error.
    """

    async def search(self, query: str) -> list[PlaceCandidate]:
        ...


def parse_google_place(data: dict[str, Any]) -> PlaceCandidate:
    """Convert one Places API (New) result into a PlaceCandidate."""
    display_name = data.get("displayName") or {}
    location = data.get("location")
    summary = data.get("editorialSummary") or {}

    return PlaceCandidate(
        id=data["id"],
        display_name=display_name.get("text") or data.get("name") or "Unknown Place",
        formatted_address=data.get("formattedAddress"),
        location=(
            Geo(lat=location["latitude"], lon=location["longitude"]) if location else None
        ),
        rating=data.get("rating"),
        price_tier=_PRICE_LEVELS.get(data.get("priceLevel") or "", PriceTier.unknown),
        types=list(data.get("types") or []),
        photos=[p["name"] for p in data.get("photos") or [] if "name" in p],
        editorial_summary=summary.get("text"),
    )


class GooglePlacesResolver:
    """Text search against ``places:searchText``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://places.googleapis.com/v1",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            api_key: Google Places API key (read from environment)
            base_url: Places API base URL
            timeout: Per-request timeout in seconds when no client is injected
            client: Optional httpx client (for testing with mocks)
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def search(self, query: str) -> list[PlaceCandidate]:
        """Search places by text query.

        Raises:
            httpx.HTTPError: On network or HTTP errors
        """
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout)
            close_client = True

        try:
            response = await client.post(
                f"{self._base_url}/places:searchText",
                json={"textQuery": query},
                headers={
                    "Content-Type": "application/json",
                    "X-Goog-Api-Key": self._api_key,
                    "X-Goog-FieldMask": _FIELD_MASK,
                },
            )
            response.raise_for_status()
            data = response.json()

            places = [parse_google_place(p) for p in data.get("places", [])]
            logger.info(f"Google Places returned {len(places)} results for {query!r}")
            return places
        finally:
            if close_client:
                await client.aclose()


def get_place_resolver(settings: Settings) -> PlaceResolver:
    """Google resolver if an API key is configured, bundled fixtures otherwise."""
    api_key = settings.google_places_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using Google Places resolver")
        return GooglePlacesResolver(
            api_key=api_key.get_secret_value(),
            base_url=settings.places_base_url,
            timeout=settings.places_timeout_seconds,
        )

    logger.warning("No Google Places API key configured, using fixture place resolver")
    return FixturePlaceResolver.from_file()
