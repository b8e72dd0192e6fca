"""Tests for place-name extraction."""

import pytest

from backend.tripwhat.intent.prompts import PLACE_NAME_EXTRACTION_PROMPT
from backend.tripwhat.orchestration.place_name import (
    ExtractionFailure,
    PlaceNameExtractor,
    validate_place_name,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Louvre Museum", "Louvre Museum"),
        ("  Eiffel Tower \n", "Eiffel Tower"),
        ('"Musée d\'Orsay"', "Musée d'Orsay"),
        ("`Sagrada Familia`", "Sagrada Familia"),
        ("Central Park.", "Central Park"),
    ],
)
def test_validate_cleans_name(raw: str, expected: str) -> None:
    assert validate_place_name(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        '""',
        "Louvre\nEiffel Tower",
        "Sorry, I don't know which place you mean",
        "I can't determine a place from that",
        "I cannot help with that",
        "Unable to extract a place",
        "x" * 81,
    ],
)
def test_validate_rejects(raw: str) -> None:
    with pytest.raises(ExtractionFailure):
        validate_place_name(raw)


def test_validate_custom_length() -> None:
    with pytest.raises(ExtractionFailure):
        validate_place_name("Musée du Louvre", max_length=5)


@pytest.mark.asyncio
async def test_extract_returns_name(scripted_llm) -> None:
    llm = scripted_llm(["Louvre Museum"])

    name = await PlaceNameExtractor(llm).extract("Can you add the Louvre to day 2?")

    assert name == "Louvre Museum"
    assert llm.calls == [("Can you add the Louvre to day 2?", PLACE_NAME_EXTRACTION_PROMPT)]


@pytest.mark.asyncio
async def test_extract_returns_none_on_refusal(scripted_llm) -> None:
    llm = scripted_llm(["Sorry, I can't tell which place you mean."])
    assert await PlaceNameExtractor(llm).extract("add something nice") is None


@pytest.mark.asyncio
async def test_extract_returns_none_on_network_error(scripted_llm) -> None:
    llm = scripted_llm([ConnectionError("network down")])
    assert await PlaceNameExtractor(llm).extract("add the Louvre") is None


@pytest.mark.asyncio
async def test_extract_returns_none_on_empty(scripted_llm) -> None:
    assert await PlaceNameExtractor(scripted_llm()).extract("add the Louvre") is None
