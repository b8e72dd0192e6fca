"""Intent detector: model classification with a deterministic fallback.

``detect`` never raises. The model path is tried first; a response without a
parseable, schema-valid JSON object is retried once, and any remaining failure
(including transport errors) downgrades to the keyword rule table.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from backend.tripwhat.intent.catalog import CategoryCatalog
from backend.tripwhat.intent.fallback import FALLBACK_CONFIDENCE, fallback_detection
from backend.tripwhat.intent.prompts import (
    INTENT_SYSTEM_PROMPT,
    PLACE_TYPE_DETECTION_PROMPT,
    build_intent_prompt,
)
from backend.tripwhat.llm.client import CompletionClient
from backend.tripwhat.models.intent import DetectedIntent
from backend.tripwhat.utils.metrics import PrometheusMetrics

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class IntentParseError(ValueError):
    """Model output did not contain a usable intent object."""


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the first JSON object embedded in ``text``.

    The widest ``{...}`` span is tried first (tolerates prose around the
    object); if that does not parse, decoding restarts at the first brace and
    stops at the end of the first complete object.

    Raises:
        IntentParseError: No brace-delimited span or no decodable object
    """
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise IntentParseError("No JSON found in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        try:
            data, _ = json.JSONDecoder().raw_decode(text, match.start())
        except json.JSONDecodeError as e:
            raise IntentParseError(f"Malformed JSON in response: {e}") from e

    if not isinstance(data, dict):
        raise IntentParseError("JSON payload is not an object")
    return data


def parse_intent_response(text: str) -> DetectedIntent:
    """Extract and validate a DetectedIntent from raw model output.

    Raises:
        IntentParseError: No JSON object, or it fails schema validation
    """
    data = extract_json_object(text)
    try:
        return DetectedIntent.model_validate(data)
    except ValidationError as e:
        raise IntentParseError(f"Intent failed validation: {e.error_count()} error(s)") from e


class IntentDetector:
    """Classifies utterances into DetectedIntent."""

    def __init__(
        self,
        llm: CompletionClient,
        catalog: CategoryCatalog,
        *,
        history_window: int = 3,
        fallback_confidence: float = FALLBACK_CONFIDENCE,
        parse_attempts: int = 2,
        metrics: PrometheusMetrics | None = None,
    ) -> None:
        self._llm = llm
        self._catalog = catalog
        self._history_window = history_window
        self._fallback_confidence = fallback_confidence
        self._parse_attempts = max(1, parse_attempts)
        self._metrics = metrics or PrometheusMetrics()

    async def detect(self, query: str, history: list[str] | None = None) -> DetectedIntent:
        """Classify ``query`` using up to ``history_window`` prior user lines.

        Returns:
            Model intent with ranked ``place_types``, or the fallback result
        """
        try:
            intent = await self._classify(query, history)
        except Exception as e:
            logger.warning(f"Intent model call failed, using fallback: {e}")
            intent = None

        if intent is None:
            result = fallback_detection(query, self._catalog, self._fallback_confidence)
            self._metrics.inc_detection(result.primary_intent.value, "fallback")
            logger.info(f"Fallback intent: {result.primary_intent.value}")
            return result

        intent.entities.place_types = await self.detect_place_types(query, intent.entities.category)
        self._metrics.inc_detection(intent.primary_intent.value, "llm")
        logger.info(
            f"Detected intent: {intent.primary_intent.value} (confidence {intent.confidence:.2f})"
        )
        return intent

    async def _classify(self, query: str, history: list[str] | None) -> DetectedIntent | None:
        prompt = build_intent_prompt(query, history, self._history_window)

        for attempt in range(1, self._parse_attempts + 1):
            text = await self._llm.complete(prompt, system=INTENT_SYSTEM_PROMPT)
            try:
                return parse_intent_response(text)
            except IntentParseError as e:
                logger.warning(
                    f"Unparseable intent response (attempt {attempt}/{self._parse_attempts}): {e}"
                )
        return None

    async def detect_place_types(self, query: str, category: str | None = None) -> list[str]:
        """Rank place types for ``query``.

        Order of preference: model answer (restricted to known types), then the
        static keyword table for ``category``, then the default set.
        """
        try:
            text = await self._llm.complete(
                f'Query: "{query}"', system=PLACE_TYPE_DETECTION_PROMPT
            )
            data = extract_json_object(text)
            ranked = [
                t
                for t in data.get("place_types") or []
                if isinstance(t, str) and self._catalog.is_known(t)
            ]
            if ranked:
                return list(dict.fromkeys(ranked))
            logger.warning("Place type response had no known types")
        except Exception as e:
            logger.warning(f"Place type detection failed, using keyword table: {e}")

        static = self._catalog.types_for_category(category)
        if static:
            return static
        return self._catalog.default_types
