"""Structured logging for tool calls and itinerary edits."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredEventLogger:
    """Emits one log line per event with a ``structured`` payload in ``extra``."""

    def log_tool_call(
        self,
        tool: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log a tool invocation."""
        log_data: dict[str, Any] = {
            "tool": tool,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Tool execution: {tool} - {outcome}"
        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_modification(
        self,
        conversation_id: str,
        operation: str,
        outcome: str,
        detail: str | None = None,
    ) -> None:
        """Log an itinerary modification attempt."""
        log_data: dict[str, Any] = {
            "conversation_id": conversation_id,
            "operation": operation,
            "outcome": outcome,
        }
        if detail:
            log_data["detail"] = detail

        log_msg = f"Itinerary modification: {operation} - {outcome}"
        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
