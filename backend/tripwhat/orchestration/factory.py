"""Wiring of the orchestrator from settings."""

import logging

from backend.tripwhat.adapters.places import PlaceResolver, get_place_resolver
from backend.tripwhat.config import Settings, get_settings
from backend.tripwhat.db.inmemory import InMemoryConversationRepository
from backend.tripwhat.db.repositories import ConversationRepository
from backend.tripwhat.intent.catalog import CategoryCatalog
from backend.tripwhat.intent.detector import IntentDetector
from backend.tripwhat.itinerary.engine import ItineraryEngine
from backend.tripwhat.llm.client import CompletionClient, get_llm_client
from backend.tripwhat.orchestration.modification import ModificationOrchestrator
from backend.tripwhat.orchestration.place_name import PlaceNameExtractor
from backend.tripwhat.tools.registry import build_default_registry

logger = logging.getLogger(__name__)


def build_orchestrator(
    settings: Settings | None = None,
    *,
    llm: CompletionClient | None = None,
    resolver: PlaceResolver | None = None,
    repository: ConversationRepository | None = None,
) -> ModificationOrchestrator:
    """Assemble an orchestrator; explicit collaborators override the settings-based defaults."""
    settings = settings or get_settings()
    llm = llm or get_llm_client(settings)
    resolver = resolver or get_place_resolver(settings)
    catalog = CategoryCatalog.load(settings.categories_path)

    detector = IntentDetector(
        llm,
        catalog,
        history_window=settings.intent_history_window,
        fallback_confidence=settings.fallback_confidence,
    )
    engine = ItineraryEngine(
        resolver,
        find_and_add_limit=settings.find_and_add_limit,
        max_photos=settings.max_photos,
    )

    logger.info(f"Orchestrator ready (deadline {settings.request_timeout_seconds}s)")
    return ModificationOrchestrator(
        detector=detector,
        engine=engine,
        repository=repository or InMemoryConversationRepository(),
        extractor=PlaceNameExtractor(llm),
        tools=build_default_registry(resolver),
        timeout_seconds=settings.request_timeout_seconds,
        history_window=settings.intent_history_window,
    )
