"""Export JSON schemas for the records the calendar engine hands to a UI."""

import json
from pathlib import Path

from tripcal.models import EventUpdate, LayoutAssignment, PlacedAccommodation, Violation

SCHEMA_MODELS = {
    "LayoutAssignment": LayoutAssignment,
    "PlacedAccommodation": PlacedAccommodation,
    "EventUpdate": EventUpdate,
    "Violation": Violation,
}


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for name, model in SCHEMA_MODELS.items():
        schema_path = schemas_dir / f"{name}.schema.json"
        with open(schema_path, "w") as f:
            json.dump(model.model_json_schema(), f, indent=2)
        print(f"Exported {name} schema to {schema_path}")


if __name__ == "__main__":
    main()
