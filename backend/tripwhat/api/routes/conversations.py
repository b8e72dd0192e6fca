"""Conversation endpoints: chat messages, itinerary storage and direct mutation requests."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from backend.tripwhat.models.conversation import ChatResponse
from backend.tripwhat.models.itinerary import Itinerary
from backend.tripwhat.orchestration.modification import ModificationOrchestrator

router = APIRouter(prefix="/conversations", tags=["conversations"])


class SendMessageRequest(BaseModel):
    """Request body for POST /conversations/{conversation_id}/messages."""

    message: str = Field(..., min_length=1, description="User message")


def get_orchestrator(request: Request) -> ModificationOrchestrator:
    """Orchestrator attached to the app at startup."""
    return request.app.state.orchestrator


Orchestrator = Annotated[ModificationOrchestrator, Depends(get_orchestrator)]


@router.post("/{conversation_id}/messages", response_model=ChatResponse)
async def send_message(
    conversation_id: str, body: SendMessageRequest, orchestrator: Orchestrator
) -> ChatResponse:
    """Classify and handle one user message.

    Errors in the request (unknown day, missing place, ...) are reported in the
    body with ``success=false``; the status code stays 200.
    """
    return await orchestrator.handle_message(conversation_id, body.message)


@router.put("/{conversation_id}/itinerary", response_model=Itinerary)
async def put_itinerary(
    conversation_id: str, itinerary: Itinerary, orchestrator: Orchestrator
) -> Itinerary:
    """Store (or replace) the conversation's itinerary."""
    return orchestrator.set_itinerary(conversation_id, itinerary)


@router.get("/{conversation_id}/itinerary", response_model=Itinerary)
async def get_itinerary(conversation_id: str, orchestrator: Orchestrator) -> Itinerary:
    itinerary = orchestrator.get_itinerary(conversation_id)
    if itinerary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No itinerary for conversation {conversation_id}",
        )
    return itinerary


@router.post("/{conversation_id}/itinerary/actions", response_model=ChatResponse)
async def apply_action(
    conversation_id: str,
    orchestrator: Orchestrator,
    payload: Annotated[dict[str, Any], Body(...)],
) -> ChatResponse:
    """Apply a structured ``{type, target, details}`` mutation request."""
    return await orchestrator.apply_action(conversation_id, payload)
