"""Free-text place-name extraction for add requests the classifier left unresolved."""

import logging

from backend.tripwhat.intent.prompts import PLACE_NAME_EXTRACTION_PROMPT
from backend.tripwhat.llm.client import CompletionClient

logger = logging.getLogger(__name__)

MAX_PLACE_NAME_LENGTH = 80

_REFUSAL_MARKERS = ("sorry", "i can't", "i cannot", "unable to")


class ExtractionFailure(ValueError):
    """Model output did not conform to the "place name only" contract."""


def validate_place_name(raw: str, max_length: int = MAX_PLACE_NAME_LENGTH) -> str:
    """Clean a model answer and check it looks like a bare place name.

    Raises:
        ExtractionFailure: Empty, multi-line, refusal-like or overlong output
    """
    text = (raw or "").strip()
    if not text:
        raise ExtractionFailure("empty response")
    if "\n" in text:
        raise ExtractionFailure("multi-line response")

    lowered = text.lower()
    if any(marker in lowered for marker in _REFUSAL_MARKERS):
        raise ExtractionFailure("refusal")

    name = text.strip("\"'`").rstrip(".").strip()
    if not name:
        raise ExtractionFailure("empty response")
    if len(name) > max_length:
        raise ExtractionFailure(f"response longer than {max_length} characters")
    return name


class PlaceNameExtractor:
    """One extra model call whose only job is to name the place."""

    def __init__(self, llm: CompletionClient) -> None:
        self._llm = llm

    async def extract(self, query: str) -> str | None:
        """Return the place name, or None when extraction fails for any reason."""
        try:
            raw = await self._llm.complete(query, system=PLACE_NAME_EXTRACTION_PROMPT)
            name = validate_place_name(raw)
        except ExtractionFailure as e:
            logger.info(f"Place name extraction rejected output: {e}")
            return None
        except Exception as e:
            logger.warning(f"Place name extraction call failed: {e}")
            return None

        logger.info(f"Extracted place name: {name!r}")
        return name
