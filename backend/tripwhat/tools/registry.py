"""Tool registry: named async tools dispatched concurrently with isolated failures."""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from backend.tripwhat.adapters.places import PlaceResolver
from backend.tripwhat.models.tools import JsonValue, ToolCall, ToolCallLog, ToolOutcome
from backend.tripwhat.utils.logging import StructuredEventLogger
from backend.tripwhat.utils.metrics import PrometheusMetrics

logger = logging.getLogger(__name__)

ToolFn = Callable[[dict[str, JsonValue]], Awaitable[JsonValue]]


class ToolNotFoundError(LookupError):
    """No tool registered under the requested name."""


class ToolRegistry:
    """Maps tool names to async callables taking a single args dict."""

    def __init__(
        self,
        metrics: PrometheusMetrics | None = None,
        event_logger: StructuredEventLogger | None = None,
        max_call_logs: int = 200,
    ) -> None:
        self._tools: dict[str, ToolFn] = {}
        self._metrics = metrics or PrometheusMetrics()
        self._event_logger = event_logger or StructuredEventLogger()
        # Most recent calls only; older entries are dropped
        self.call_logs: deque[ToolCallLog] = deque(maxlen=max_call_logs)

    def register(self, name: str, fn: ToolFn) -> None:
        self._tools[name] = fn

    def has(self, name: str) -> bool:
        return name in self._tools

    @property
    def names(self) -> list[str]:
        return sorted(self._tools)

    async def execute(self, call: ToolCall) -> JsonValue:
        """Run one tool call with timing, metrics and a ToolCallLog entry.

        Raises:
            ToolNotFoundError: Unknown tool name
            Exception: Re-raises whatever the tool raised, after logging
        """
        fn = self._tools.get(call.name)
        if fn is None:
            self._metrics.inc_tool_error(call.name, "tool_not_found")
            raise ToolNotFoundError(f"Unknown tool: {call.name}")

        started_at = datetime.now(UTC)
        start = time.perf_counter()
        error: str | None = None
        result: JsonValue = None

        try:
            result = await fn(call.args)
            return result
        except Exception as e:
            error = str(e) or type(e).__name__
            raise
        finally:
            latency_ms = (time.perf_counter() - start) * 1000
            outcome = "success" if error is None else "error"

            self._metrics.record_tool_latency(call.name, outcome, latency_ms)
            if error is not None:
                self._metrics.inc_tool_error(call.name, "exception")
            self._event_logger.log_tool_call(call.name, outcome, latency_ms, error)

            output_summary: dict[str, JsonValue] = {}
            if isinstance(result, list):
                output_summary["count"] = len(result)

            self.call_logs.append(
                ToolCallLog(
                    name=call.name,
                    started_at=started_at,
                    finished_at=datetime.now(UTC),
                    duration_ms=int(latency_ms),
                    success=error is None,
                    error=error,
                    input_summary={
                        k: v for k, v in call.args.items() if isinstance(v, str | int | float | bool)
                    },
                    output_summary=output_summary,
                )
            )

    async def execute_many(self, calls: list[ToolCall]) -> list[ToolOutcome]:
        """Run all calls concurrently; one outcome per call, in request order.

        A failing call yields an error payload in its own slot and never
        aborts its siblings.
        """
        results = await asyncio.gather(
            *(self.execute(call) for call in calls), return_exceptions=True
        )

        outcomes: list[ToolOutcome] = []
        for call, result in zip(calls, results, strict=True):
            if isinstance(result, ToolNotFoundError):
                outcomes.append(
                    ToolOutcome(
                        name=call.name,
                        success=False,
                        error={"error": "tool_not_found", "message": str(result)},
                    )
                )
            elif isinstance(result, BaseException):
                outcomes.append(
                    ToolOutcome(
                        name=call.name,
                        success=False,
                        error={"error": type(result).__name__, "message": str(result)},
                    )
                )
            else:
                outcomes.append(ToolOutcome(name=call.name, success=True, value=result))
        return outcomes


def _place_search_tool(resolver: PlaceResolver, default_query: str, limit: int) -> ToolFn:
    async def tool(args: dict[str, JsonValue]) -> JsonValue:
        query = str(args.get("query") or default_query)
        location = args.get("location")
        if location:
            query = f"{query} in {location}"

        places = await resolver.search(query)
        return [p.model_dump(mode="json", by_alias=True) for p in places[:limit]]

    return tool


def _nearby_tool(resolver: PlaceResolver, limit: int) -> ToolFn:
    async def tool(args: dict[str, JsonValue]) -> JsonValue:
        location = args.get("location")
        if not location:
            raise ValueError("get_nearby_attractions requires a location")

        places = await resolver.search(f"attractions in {location}")
        return [p.model_dump(mode="json", by_alias=True) for p in places[:limit]]

    return tool


def build_default_registry(resolver: PlaceResolver, max_results: int = 5) -> ToolRegistry:
    """Registry with the place-backed search tools."""
    registry = ToolRegistry()
    registry.register(
        "search_attractions", _place_search_tool(resolver, "tourist attractions", max_results)
    )
    registry.register("search_restaurants", _place_search_tool(resolver, "restaurants", max_results))
    registry.register("search_hotels", _place_search_tool(resolver, "hotels", max_results))
    registry.register(
        "search_destinations", _place_search_tool(resolver, "destinations", max_results)
    )
    registry.register("get_nearby_attractions", _nearby_tool(resolver, max_results))
    return registry
