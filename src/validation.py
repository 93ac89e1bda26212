"""Structural schema validation for submitted receipt payloads."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"


class InvalidReceiptError(ValueError):
    """Raised when a payload does not satisfy the receipt schema."""


def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_receipt(data: dict) -> None:
    """Validate a receipt payload against schema. Raises InvalidReceiptError if invalid."""
    schema = _load_schema("receipt")
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvalidReceiptError(f"{location}: {e.message}") from e
