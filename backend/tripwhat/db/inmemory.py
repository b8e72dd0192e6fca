"""In-memory implementation of ConversationRepository."""

from datetime import UTC, datetime

from backend.tripwhat.models.conversation import ChatMessage, Conversation
from backend.tripwhat.models.itinerary import Itinerary


class InMemoryConversationRepository:
    """Dict-backed repository. Reads and writes are deep copies, so callers
    never share state with the store."""

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}

    def get(self, conversation_id: str) -> Conversation | None:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            return None
        return conversation.model_copy(deep=True)

    def get_or_create(self, conversation_id: str) -> Conversation:
        if conversation_id not in self._conversations:
            self._conversations[conversation_id] = Conversation(conversation_id=conversation_id)
        return self._conversations[conversation_id].model_copy(deep=True)

    def save_itinerary(self, conversation_id: str, itinerary: Itinerary | None) -> None:
        conversation = self._stored(conversation_id)
        conversation.itinerary = itinerary.model_copy(deep=True) if itinerary else None
        conversation.updated_at = datetime.now(UTC)

    def append_messages(self, conversation_id: str, messages: list[ChatMessage]) -> None:
        conversation = self._stored(conversation_id)
        conversation.messages.extend(m.model_copy() for m in messages)
        conversation.updated_at = datetime.now(UTC)

    def _stored(self, conversation_id: str) -> Conversation:
        if conversation_id not in self._conversations:
            self._conversations[conversation_id] = Conversation(conversation_id=conversation_id)
        return self._conversations[conversation_id]
