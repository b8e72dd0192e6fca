"""Repository protocol interfaces for conversation state."""

from typing import Protocol

from backend.tripwhat.models.conversation import ChatMessage, Conversation
from backend.tripwhat.models.itinerary import Itinerary


class ConversationRepository(Protocol):
    """Persistence boundary for conversations and their itineraries."""

    def get(self, conversation_id: str) -> Conversation | None:
        """Fetch a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            A copy of the stored conversation, or None if unknown
        """
        ...

    def get_or_create(self, conversation_id: str) -> Conversation:
        """Fetch a conversation, creating an empty one if unknown."""
        ...

    def save_itinerary(self, conversation_id: str, itinerary: Itinerary | None) -> None:
        """Replace the conversation's itinerary (creating the conversation if needed)."""
        ...

    def append_messages(self, conversation_id: str, messages: list[ChatMessage]) -> None:
        """Append messages in order."""
        ...
