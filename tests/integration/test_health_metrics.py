"""Integration tests for /health and /metrics endpoints."""

import pytest
from fastapi.testclient import TestClient

from backend.tripwhat.adapters.fixtures import FixturePlaceResolver
from backend.tripwhat.llm.client import DeterministicStubClient
from backend.tripwhat.main import create_app
from backend.tripwhat.orchestration.factory import build_orchestrator


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    orchestrator = build_orchestrator(
        llm=DeterministicStubClient(), resolver=FixturePlaceResolver.from_file()
    )
    return TestClient(create_app(orchestrator))


def test_health_returns_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_reports_version(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["version"] == "0.1.0"


def test_metrics_exposes_prometheus_text(client: TestClient) -> None:
    """Metrics include counters recorded by a chat round-trip."""
    client.post("/conversations/m1/messages", json={"message": "hello"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    body = response.text
    assert "intent_detections_total" in body
    assert 'source="fallback"' in body
    assert "itinerary_modifications_total" in body
    assert "tool_latency_ms" in body
