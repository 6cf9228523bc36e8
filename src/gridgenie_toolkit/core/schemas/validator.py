"""
Schema Validation Utilities

Validates layout documents (the JSON form of GeneratedLayout) before they
are deserialized.

Two levels:
- Basic checks (always): required fields, schema version, element ids unique
- Strict checks: full JSON Schema validation via jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


LAYOUT_SCHEMA_VERSION = 1

_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_layout(data: dict[str, Any], *, strict: bool = True) -> None:
    """
    Validate a layout document.

    Args:
        data: Layout dictionary to validate
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Layout document must be a JSON object")

    required = ["schema_version", "id", "elements", "dimensions", "metadata", "config"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != LAYOUT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported layout schema version: {version} (expected {LAYOUT_SCHEMA_VERSION})",
            path="schema_version",
        )

    elements = data.get("elements")
    if not isinstance(elements, list):
        raise ValidationError("elements must be a list", path="elements")

    seen: set[str] = set()
    duplicates: list[str] = []
    for element in elements:
        element_id = element.get("id") if isinstance(element, dict) else None
        if element_id in seen:
            duplicates.append(element_id)
        seen.add(element_id)
    if duplicates:
        raise ValidationError(
            f"Duplicate element ids: {sorted(set(duplicates))}",
            path="elements",
            errors=[f"Duplicate id: {d}" for d in duplicates],
        )

    config = data["config"]
    if not isinstance(config, dict):
        raise ValidationError("config must be an object", path="config")

    page_count = config.get("page_count")
    if isinstance(page_count, int):
        for i, element in enumerate(elements):
            page = element.get("page") if isinstance(element, dict) else None
            if isinstance(page, int) and page > page_count:
                raise ValidationError(
                    f"Element page {page} exceeds page_count {page_count}",
                    path=f"elements[{i}].page",
                )

    if strict:
        schema = _load_schema("layout")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e
