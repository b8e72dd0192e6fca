"""Fixture-based place resolver for local development and tests."""

import json
import logging
import re
from pathlib import Path

from backend.tripwhat.models.places import PlaceCandidate

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

_TOKEN = re.compile(r"[a-z0-9_]+")
_STOPWORDS = frozenset({"the", "and", "for", "some", "with", "visit"})


def _split_query(query: str) -> tuple[str, str]:
    """Split ``"{subject} in {destination}"`` on the last " in "."""
    subject, sep, destination = query.rpartition(" in ")
    if not sep:
        return query, ""
    return subject, destination


def _matches(place: PlaceCandidate, tokens: list[str]) -> bool:
    name = place.display_name.lower()
    for token in tokens:
        stem = token[:-1] if token.endswith("s") and len(token) > 3 else token
        if stem in name or any(stem in t for t in place.types):
            return True
    return False


class FixturePlaceResolver:
    """Keyword search over canned places keyed by destination.

    Matching is by any query token found in a place's name or types; results
    keep fixture order, which doubles as the ranking.
    """

    def __init__(self, places_by_destination: dict[str, list[PlaceCandidate]]) -> None:
        self._places = {k.lower(): v for k, v in places_by_destination.items()}

    @classmethod
    def from_file(cls, path: Path | None = None) -> "FixturePlaceResolver":
        """Load fixtures (defaults to the bundled places.json)."""
        fixtures_path = path or FIXTURES_DIR / "places.json"
        with open(fixtures_path) as f:
            data = json.load(f)

        return cls(
            {
                destination: [PlaceCandidate.model_validate(p) for p in places]
                for destination, places in data.items()
            }
        )

    async def search(self, query: str) -> list[PlaceCandidate]:
        subject, destination = _split_query(query)
        candidates = self._places.get(destination.strip().lower(), [])
        tokens = [
            t for t in _TOKEN.findall(subject.lower()) if len(t) > 2 and t not in _STOPWORDS
        ]
        results = [p for p in candidates if _matches(p, tokens)]
        logger.info(f"Fixture places returned {len(results)} results for {query!r}")
        return results
