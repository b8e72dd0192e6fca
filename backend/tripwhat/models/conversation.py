"""Conversation and modification response models."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from backend.tripwhat.models.itinerary import Activity, Itinerary


class ChatMessage(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Conversation(BaseModel):
    """Conversation state held by the persistence layer."""

    conversation_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    itinerary: Itinerary | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def recent_user_messages(self, limit: int) -> list[str]:
        """Most recent user messages, oldest first."""
        if limit <= 0:
            return []
        contents = [m.content for m in self.messages if m.role == "user"]
        return contents[-limit:]


class MutationResult(BaseModel):
    """Outcome of one mutation engine operation."""

    itinerary: Itinerary
    message: str
    added: list[Activity] = Field(default_factory=list)
    removed: list[Activity] = Field(default_factory=list)
    moved: list[Activity] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Structured reply returned by the orchestrator.

    Failures carry a short ``error`` plus an actionable ``suggestion``;
    ``itinerary`` is always the conversation's itinerary after the request
    (unchanged when the request failed).
    """

    conversation_id: str
    intent: str
    success: bool = True
    message: str = ""
    error: str | None = None
    suggestion: str | None = None
    itinerary: Itinerary | None = None
    activities: list[Activity] = Field(default_factory=list)
