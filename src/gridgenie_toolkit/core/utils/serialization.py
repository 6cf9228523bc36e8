"""
Serialization Utilities

Provides to/from JSON utilities for layout models.

- `serialize_*` / `deserialize_*` pairs for layouts and configs
- Layout documents are validated against the schema before deserialization
- Configs accept the UI's camelCase keys as well as snake_case
- element_count is never trusted on load; it is recalculated
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from ..models.config import LayoutConfig
from ..models.elements import element_from_dict
from ..models.layout import GeneratedLayout, LayoutMetadata, PageDimensions
from ..schemas.validator import LAYOUT_SCHEMA_VERSION, validate_layout

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

# Older config files name the cell spacing "gutter"
_CONFIG_ALIASES = {"gutter_x": "grid_spacing_x", "gutter_y": "grid_spacing_y"}


def _snake_case(key: str) -> str:
    """customWidth -> custom_width; gridSpacingX -> grid_spacing_x."""
    return _CAMEL_RE.sub("_", key).lower()


# ─────────────────────────────────────────────────────────────────────────────
# Config Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_config(config: LayoutConfig) -> dict[str, Any]:
    """Serialize a LayoutConfig to a dictionary."""
    return config.to_dict()


def deserialize_config(data: dict[str, Any]) -> LayoutConfig:
    """
    Build a LayoutConfig from a dictionary.

    Keys may be snake_case or camelCase. gutter_x/gutter_y fill in the
    grid spacing when it is not given. Unknown keys are ignored and
    missing keys take their defaults.

    Raises:
        ValueError: If values violate LayoutConfig invariants
    """
    known = LayoutConfig.field_names()
    kwargs: dict[str, Any] = {}
    aliased: dict[str, Any] = {}
    ignored: list[str] = []
    for key, value in data.items():
        name = key if key in known else _snake_case(key)
        if name in known:
            kwargs[name] = value
        elif name in _CONFIG_ALIASES:
            aliased[_CONFIG_ALIASES[name]] = value
        else:
            ignored.append(key)
    for name, value in aliased.items():
        kwargs.setdefault(name, value)
    if ignored:
        logger.debug(f"Ignoring unknown config keys: {sorted(ignored)}")
    return LayoutConfig(**kwargs)


def load_config_json(path: Path) -> LayoutConfig:
    """Load a LayoutConfig from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return deserialize_config(data)


# ─────────────────────────────────────────────────────────────────────────────
# Layout Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_layout(layout: GeneratedLayout) -> dict[str, Any]:
    """
    Serialize a GeneratedLayout to a dictionary.

    The output passes validate_layout().
    """
    return {
        "schema_version": LAYOUT_SCHEMA_VERSION,
        "id": layout.id,
        "elements": [element.to_dict() for element in layout.elements],
        "dimensions": layout.dimensions.to_dict(),
        "metadata": layout.metadata.to_dict(),
        "config": serialize_config(layout.config),
        "warnings": list(layout.warnings),
    }


def deserialize_layout(data: dict[str, Any], *, validate: bool = True) -> GeneratedLayout:
    """
    Deserialize a GeneratedLayout from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against the schema first

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If element geometry or config values are invalid
    """
    if validate:
        validate_layout(data)

    elements = tuple(element_from_dict(item) for item in data["elements"])
    meta = data["metadata"]
    metadata = LayoutMetadata(
        aesthetic_rule=meta["aesthetic_rule"],
        grid_system=meta["grid_system"],
        grid_size=meta.get("grid_size", ""),
        generated_at=datetime.fromisoformat(meta["generated_at"]),
        element_count=len(elements),
        is_spread=meta["is_spread"],
        content_type=meta["content_type"],
        generation_mode=meta.get("generation_mode", "fixed"),
        spine_width=meta.get("spine_width", 0.0),
    )
    dims = data["dimensions"]
    return GeneratedLayout(
        id=data["id"],
        elements=elements,
        dimensions=PageDimensions(width=dims["width"], height=dims["height"]),
        metadata=metadata,
        config=deserialize_config(data["config"]),
        warnings=tuple(data.get("warnings", [])),
    )


def save_layout_json(layout: GeneratedLayout, path: Path) -> None:
    """Write a layout document to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_layout(layout), f, indent=2, ensure_ascii=False)


def load_layout_json(path: Path, *, validate: bool = True) -> GeneratedLayout:
    """Load and validate a layout document from disk."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_layout(data, validate=validate)
