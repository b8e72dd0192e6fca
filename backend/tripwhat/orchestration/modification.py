"""Modification orchestrator: routes a chat message to the engine or the chat path.

A message is handled as an itinerary edit only when the classifier returns a
modification intent AND the conversation already has an itinerary. Every
lower-layer failure becomes a ChatResponse carrying ``error`` and
``suggestion``; nothing below this layer reaches the caller as an exception.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from backend.tripwhat.db.repositories import ConversationRepository
from backend.tripwhat.intent.detector import IntentDetector
from backend.tripwhat.itinerary.engine import ItineraryEngine, parse_action
from backend.tripwhat.itinerary.errors import ModificationError, PlaceLookupError
from backend.tripwhat.models.actions import ActionKind
from backend.tripwhat.models.conversation import (
    ChatMessage,
    ChatResponse,
    Conversation,
    MutationResult,
)
from backend.tripwhat.models.intent import DetectedIntent, IntentType
from backend.tripwhat.models.itinerary import Itinerary
from backend.tripwhat.models.tools import JsonValue, ToolCall
from backend.tripwhat.orchestration.actions import build_action, categories_from
from backend.tripwhat.orchestration.chat import ChatHandler, GuidanceChatHandler
from backend.tripwhat.orchestration.place_name import PlaceNameExtractor
from backend.tripwhat.tools.registry import ToolRegistry
from backend.tripwhat.utils.logging import StructuredEventLogger
from backend.tripwhat.utils.metrics import PrometheusMetrics

logger = logging.getLogger(__name__)

TIMEOUT_ERROR = "Request timed out"
TIMEOUT_SUGGESTION = "The request took too long. Please try again, or simplify your request."
RETRY_ERROR = "Something went wrong while updating your itinerary"
RETRY_SUGGESTION = "Please try again in a moment. Your itinerary was not changed."
NO_ITINERARY_ERROR = "No itinerary found for this conversation"
NO_ITINERARY_SUGGESTION = "Create an itinerary first, then ask me to change it."

_ACTION_TYPES = frozenset(k.value for k in ActionKind)


class ModificationOrchestrator:
    """Per-request pipeline: classify, route, mutate or chat, persist."""

    def __init__(
        self,
        detector: IntentDetector,
        engine: ItineraryEngine,
        repository: ConversationRepository,
        extractor: PlaceNameExtractor,
        tools: ToolRegistry,
        chat_handler: ChatHandler | None = None,
        *,
        timeout_seconds: float = 30.0,
        history_window: int = 3,
        metrics: PrometheusMetrics | None = None,
        event_logger: StructuredEventLogger | None = None,
    ) -> None:
        self.detector = detector
        self.engine = engine
        self.repository = repository
        self.extractor = extractor
        self.tools = tools
        self.chat_handler = chat_handler or GuidanceChatHandler()
        self.timeout_seconds = timeout_seconds
        self.history_window = history_window
        self._metrics = metrics or PrometheusMetrics()
        self._event_logger = event_logger or StructuredEventLogger()

    async def handle_message(self, conversation_id: str, message: str) -> ChatResponse:
        """Process one user message under the request deadline."""
        try:
            return await asyncio.wait_for(
                self._handle(conversation_id, message), timeout=self.timeout_seconds
            )
        except TimeoutError:
            logger.warning(
                f"Conversation {conversation_id}: request exceeded {self.timeout_seconds}s"
            )
            return self._timeout_response(conversation_id)

    async def apply_action(self, conversation_id: str, payload: dict) -> ChatResponse:
        """Apply a raw mutation request (``{type, target, details}``) under the deadline."""
        try:
            return await asyncio.wait_for(
                self._apply_payload(conversation_id, payload), timeout=self.timeout_seconds
            )
        except TimeoutError:
            logger.warning(
                f"Conversation {conversation_id}: action exceeded {self.timeout_seconds}s"
            )
            return self._timeout_response(conversation_id)

    def set_itinerary(self, conversation_id: str, itinerary: Itinerary) -> Itinerary:
        self.repository.save_itinerary(conversation_id, itinerary)
        return itinerary

    def get_itinerary(self, conversation_id: str) -> Itinerary | None:
        conversation = self.repository.get(conversation_id)
        return conversation.itinerary if conversation else None

    async def _handle(self, conversation_id: str, message: str) -> ChatResponse:
        conversation = self.repository.get_or_create(conversation_id)
        history = conversation.recent_user_messages(self.history_window)

        intent = await self.detector.detect(message, history)

        if intent.is_modification and conversation.itinerary is not None:
            response = await self._modify(conversation, message, intent)
        else:
            if intent.is_modification:
                logger.info(
                    f"Conversation {conversation_id}: {intent.primary_intent.value} "
                    "without an itinerary, routing to chat"
                )
            response = await self._chat(conversation, message, intent)

        self.repository.append_messages(
            conversation_id,
            [
                ChatMessage(role="user", content=message),
                ChatMessage(role="assistant", content=response.message or response.error or ""),
            ],
        )
        return response

    async def _modify(
        self, conversation: Conversation, message: str, intent: DetectedIntent
    ) -> ChatResponse:
        itinerary = conversation.itinerary
        assert itinerary is not None
        entities = intent.entities
        kind = intent.primary_intent

        subject = entities.place_name or entities.activity_name or entities.category
        if kind == IntentType.add_activity and not subject:
            entities.place_name = await self.extractor.extract(message)

        async def mutate() -> MutationResult:
            if kind == IntentType.add_day:
                return self.engine.add_day(itinerary)
            if kind == IntentType.remove_day:
                return self.engine.remove_day(itinerary, entities.target_day)
            if kind == IntentType.find_and_add:
                return await self.engine.find_and_add(
                    itinerary, entities.target_day, categories_from(entities), entities.time_slot
                )
            return await self.engine.apply(itinerary, build_action(intent))

        return await self._run_mutation(conversation, kind.value, mutate)

    async def _apply_payload(self, conversation_id: str, payload: dict) -> ChatResponse:
        conversation = self.repository.get_or_create(conversation_id)
        itinerary = conversation.itinerary
        kind = payload.get("type")
        operation = kind if isinstance(kind, str) and kind in _ACTION_TYPES else "unknown"

        if itinerary is None:
            return ChatResponse(
                conversation_id=conversation_id,
                intent=operation,
                success=False,
                error=NO_ITINERARY_ERROR,
                suggestion=NO_ITINERARY_SUGGESTION,
            )

        async def mutate() -> MutationResult:
            return await self.engine.apply(itinerary, parse_action(payload))

        return await self._run_mutation(conversation, operation, mutate)

    async def _run_mutation(
        self,
        conversation: Conversation,
        operation: str,
        mutate: Callable[[], Awaitable[MutationResult]],
    ) -> ChatResponse:
        """Run an engine call, persist on success, map failures to a response."""
        conversation_id = conversation.conversation_id
        try:
            result = await mutate()
        except ModificationError as e:
            self._record(conversation_id, operation, e.code, e.message)
            return ChatResponse(
                conversation_id=conversation_id,
                intent=operation,
                success=False,
                error=e.message,
                suggestion=e.suggestion,
                itinerary=conversation.itinerary,
            )
        except PlaceLookupError as e:
            self._record(conversation_id, operation, "lookup_failed", str(e))
            return self._retry_response(conversation, operation)
        except Exception as e:
            logger.error(f"Unexpected error applying {operation}: {e}", exc_info=True)
            self._record(conversation_id, operation, "internal_error", str(e))
            return self._retry_response(conversation, operation)

        self.repository.save_itinerary(conversation_id, result.itinerary)
        self._record(conversation_id, operation, "success", result.message)
        return ChatResponse(
            conversation_id=conversation_id,
            intent=operation,
            message=result.message,
            itinerary=result.itinerary,
            activities=result.added or result.moved,
        )

    async def _chat(
        self, conversation: Conversation, message: str, intent: DetectedIntent
    ) -> ChatResponse:
        outcomes = []
        if intent.tools_to_call and not intent.is_modification:
            outcomes = await self.tools.execute_many(self._tool_calls(conversation, message, intent))

        text = await self.chat_handler.respond(conversation, message, intent, outcomes)
        return ChatResponse(
            conversation_id=conversation.conversation_id,
            intent=intent.primary_intent.value,
            message=text,
            itinerary=conversation.itinerary,
        )

    def _tool_calls(
        self, conversation: Conversation, message: str, intent: DetectedIntent
    ) -> list[ToolCall]:
        entities = intent.entities
        location = entities.location or entities.destination
        if not location and conversation.itinerary is not None:
            location = conversation.itinerary.destination

        args: dict[str, JsonValue] = {
            "query": entities.category or " ".join(entities.query_terms or []) or message
        }
        if location:
            args["location"] = location
        return [ToolCall(name=name, args=dict(args)) for name in intent.tools_to_call]

    def _record(self, conversation_id: str, operation: str, outcome: str, detail: str) -> None:
        self._metrics.inc_modification(operation, outcome)
        self._event_logger.log_modification(conversation_id, operation, outcome, detail)

    def _retry_response(self, conversation: Conversation, operation: str) -> ChatResponse:
        return ChatResponse(
            conversation_id=conversation.conversation_id,
            intent=operation,
            success=False,
            error=RETRY_ERROR,
            suggestion=RETRY_SUGGESTION,
            itinerary=conversation.itinerary,
        )

    def _timeout_response(self, conversation_id: str) -> ChatResponse:
        return ChatResponse(
            conversation_id=conversation_id,
            intent="unknown",
            success=False,
            error=TIMEOUT_ERROR,
            suggestion=TIMEOUT_SUGGESTION,
            itinerary=self.get_itinerary(conversation_id),
        )
