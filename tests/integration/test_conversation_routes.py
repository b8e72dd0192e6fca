"""Integration tests for the conversation endpoints.

Runs the full stack offline: stub LLM (rule fallback) and fixture places.
"""

import pytest
from fastapi.testclient import TestClient

from backend.tripwhat.adapters.fixtures import FixturePlaceResolver
from backend.tripwhat.llm.client import DeterministicStubClient
from backend.tripwhat.main import create_app
from backend.tripwhat.orchestration.factory import build_orchestrator

ITINERARY = {
    "destination": "Paris",
    "duration": 2,
    "days": [
        {
            "dayNumber": 1,
            "title": "Day 1",
            "timeSlots": [
                {
                    "time": "09:00-12:00",
                    "label": "Morning",
                    "activities": [
                        {
                            "id": "act_eiffel",
                            "name": "Eiffel Tower",
                            "type": "tourist_attraction",
                            "metadata": {
                                "addedBy": "ai",
                                "addedAt": "2025-06-01T09:00:00Z",
                                "source": "generated",
                            },
                        }
                    ],
                },
                {"time": "14:00-18:00", "label": "Afternoon", "activities": []},
            ],
        },
        {
            "dayNumber": 2,
            "title": "Day 2",
            "timeSlots": [
                {"time": "09:00-12:00", "period": "morning", "activities": []},
                {"time": "19:00-22:00", "period": "evening", "activities": []},
            ],
        },
    ],
}


@pytest.fixture
def client() -> TestClient:
    orchestrator = build_orchestrator(
        llm=DeterministicStubClient(), resolver=FixturePlaceResolver.from_file()
    )
    return TestClient(create_app(orchestrator))


def _put_itinerary(client: TestClient, conversation_id: str = "c1") -> None:
    response = client.put(f"/conversations/{conversation_id}/itinerary", json=ITINERARY)
    assert response.status_code == 200


def test_put_and_get_itinerary(client: TestClient) -> None:
    _put_itinerary(client)

    response = client.get("/conversations/c1/itinerary")

    assert response.status_code == 200
    data = response.json()
    assert data["destination"] == "Paris"
    assert data["days"][0]["dayNumber"] == 1
    assert data["days"][0]["timeSlots"][0]["activities"][0]["id"] == "act_eiffel"


def test_get_missing_itinerary_returns_404(client: TestClient) -> None:
    response = client.get("/conversations/nobody/itinerary")
    assert response.status_code == 404


def test_put_invalid_itinerary_returns_422(client: TestClient) -> None:
    response = client.put("/conversations/c1/itinerary", json={"destination": "Paris"})
    assert response.status_code == 422


def test_empty_message_rejected(client: TestClient) -> None:
    response = client.post("/conversations/c1/messages", json={"message": ""})
    assert response.status_code == 422


def test_add_without_resolvable_subject(client: TestClient) -> None:
    """The keyword add rule carries no category, and the stub extractor names no place."""
    _put_itinerary(client)

    response = client.post(
        "/conversations/c1/messages", json={"message": "Add some museums to day 2 morning"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "add_activity"
    assert data["success"] is False
    assert data["suggestion"]


def test_remove_via_action_endpoint(client: TestClient) -> None:
    _put_itinerary(client)

    response = client.post(
        "/conversations/c1/itinerary/actions",
        json={"type": "remove", "target": {"day": 1, "activityName": "eiffel"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Removed Eiffel Tower from Day 1 Morning"

    itinerary = client.get("/conversations/c1/itinerary").json()
    assert itinerary["days"][0]["timeSlots"][0]["activities"] == []


def test_add_by_name_via_action_endpoint(client: TestClient) -> None:
    _put_itinerary(client)

    response = client.post(
        "/conversations/c1/itinerary/actions",
        json={
            "type": "add",
            "target": {"day": 2, "timeSlot": "Morning"},
            "details": {"placeName": "Louvre"},
        },
    )

    data = response.json()
    assert data["success"] is True
    assert data["activities"][0]["placeId"] == "fx_paris_louvre"
    assert data["itinerary"]["days"][1]["timeSlots"][0]["activities"][0]["name"] == "Louvre Museum"


def test_unknown_day_reports_error_in_body(client: TestClient) -> None:
    _put_itinerary(client)

    response = client.post("/conversations/c1/messages", json={"message": "remove day 7"})

    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "remove_activity"
    assert data["success"] is False


def test_message_without_itinerary_gets_guidance(client: TestClient) -> None:
    response = client.post(
        "/conversations/fresh/messages", json={"message": "Remove the Louvre from day 1"}
    )

    data = response.json()
    assert data["success"] is True
    assert data["intent"] == "remove_activity"
    assert "You don't have an itinerary yet" in data["message"]
    assert data["itinerary"] is None


def test_search_message_lists_places(client: TestClient) -> None:
    response = client.post(
        "/conversations/c2/messages", json={"message": "Show me restaurants"}
    )

    data = response.json()
    assert data["intent"] == "search_restaurants"
    assert "Places to eat" in data["message"]
