"""Tests for the tool registry."""

import asyncio

import pytest

from backend.tripwhat.models.tools import JsonValue, ToolCall
from backend.tripwhat.tools.registry import (
    ToolNotFoundError,
    ToolRegistry,
    build_default_registry,
)


async def _echo(args: dict[str, JsonValue]) -> JsonValue:
    return [args.get("query")]


async def _boom(args: dict[str, JsonValue]) -> JsonValue:
    raise RuntimeError("upstream unavailable")


async def _slow(args: dict[str, JsonValue]) -> JsonValue:
    await asyncio.sleep(0.01)
    return "slow"


@pytest.fixture
def registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register("echo", _echo)
    registry.register("boom", _boom)
    registry.register("slow", _slow)
    return registry


@pytest.mark.asyncio
async def test_execute_returns_value_and_logs(registry: ToolRegistry) -> None:
    result = await registry.execute(ToolCall(name="echo", args={"query": "museums", "n": 2}))

    assert result == ["museums"]
    log = registry.call_logs[-1]
    assert log.name == "echo"
    assert log.success is True
    assert log.error is None
    assert log.input_summary == {"query": "museums", "n": 2}
    assert log.output_summary == {"count": 1}
    assert log.finished_at >= log.started_at


@pytest.mark.asyncio
async def test_execute_reraises_and_logs_failure(registry: ToolRegistry) -> None:
    with pytest.raises(RuntimeError, match="upstream unavailable"):
        await registry.execute(ToolCall(name="boom"))

    log = registry.call_logs[-1]
    assert log.success is False
    assert log.error == "upstream unavailable"


@pytest.mark.asyncio
async def test_execute_unknown_tool(registry: ToolRegistry) -> None:
    with pytest.raises(ToolNotFoundError):
        await registry.execute(ToolCall(name="teleport"))


@pytest.mark.asyncio
async def test_execute_many_isolates_failures(registry: ToolRegistry) -> None:
    """One outcome per call, in request order; failures never abort siblings."""
    outcomes = await registry.execute_many(
        [
            ToolCall(name="slow"),
            ToolCall(name="boom"),
            ToolCall(name="teleport"),
            ToolCall(name="echo", args={"query": "parks"}),
        ]
    )

    assert [o.name for o in outcomes] == ["slow", "boom", "teleport", "echo"]
    assert outcomes[0].success is True
    assert outcomes[0].value == "slow"
    assert outcomes[1].success is False
    assert outcomes[1].error == {"error": "RuntimeError", "message": "upstream unavailable"}
    assert outcomes[2].success is False
    assert outcomes[2].error is not None
    assert outcomes[2].error["error"] == "tool_not_found"
    assert outcomes[3].value == ["parks"]


@pytest.mark.asyncio
async def test_execute_many_empty(registry: ToolRegistry) -> None:
    assert await registry.execute_many([]) == []


def test_default_registry_tools(fake_resolver) -> None:
    registry = build_default_registry(fake_resolver)

    assert registry.names == [
        "get_nearby_attractions",
        "search_attractions",
        "search_destinations",
        "search_hotels",
        "search_restaurants",
    ]
    assert not registry.has("search_flights")


@pytest.mark.asyncio
async def test_search_tool_builds_query_and_limits(fake_resolver, place_factory) -> None:
    fake_resolver.results["restaurants"] = [
        place_factory(f"p{i}", f"Bistro {i}", ["restaurant"]) for i in range(5)
    ]
    registry = build_default_registry(fake_resolver, max_results=2)

    result = await registry.execute(
        ToolCall(name="search_restaurants", args={"location": "Paris"})
    )

    assert fake_resolver.queries == ["restaurants in Paris"]
    assert isinstance(result, list)
    assert [p["displayName"] for p in result] == ["Bistro 0", "Bistro 1"]
    assert result[0]["priceTier"] == "unknown"


@pytest.mark.asyncio
async def test_nearby_requires_location(fake_resolver) -> None:
    registry = build_default_registry(fake_resolver)

    outcomes = await registry.execute_many([ToolCall(name="get_nearby_attractions")])

    assert outcomes[0].success is False
    assert outcomes[0].error is not None
    assert outcomes[0].error["error"] == "ValueError"
    assert fake_resolver.queries == []


@pytest.mark.asyncio
async def test_call_log_keeps_only_recent_calls() -> None:
    """A long-lived registry holds at most ``max_call_logs`` entries."""
    registry = ToolRegistry(max_call_logs=10)
    registry.register("echo", _echo)

    for i in range(50):
        await registry.execute_many([ToolCall(name="echo", args={"query": f"q{i}"})])

    assert len(registry.call_logs) == 10
    assert registry.call_logs[0].input_summary == {"query": "q40"}
    assert registry.call_logs[-1].input_summary == {"query": "q49"}
