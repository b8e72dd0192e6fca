"""Export JSON schemas for Itinerary, ItineraryAction and DetectedIntent."""

import json
from pathlib import Path

from pydantic import BaseModel

from backend.tripwhat.models import DetectedIntent, Itinerary, ItineraryAction

SCHEMA_MODELS: dict[str, type[BaseModel]] = {
    "Itinerary": Itinerary,
    "ItineraryAction": ItineraryAction,
    "DetectedIntent": DetectedIntent,
}


def main(schemas_dir: Path = Path("docs/schemas")) -> list[Path]:
    """Export schemas (wire/camelCase form) to docs/schemas/."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, model in SCHEMA_MODELS.items():
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2)
        print(f"Exported {name} schema to {path}")
        written.append(path)
    return written


if __name__ == "__main__":
    main()
