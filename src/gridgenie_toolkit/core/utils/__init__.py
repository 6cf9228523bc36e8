"""
Core Utilities Package

Serialization helpers for layout models.
"""

from .serialization import (
    serialize_config,
    deserialize_config,
    load_config_json,
    serialize_layout,
    deserialize_layout,
    save_layout_json,
    load_layout_json,
)

__all__ = [
    "serialize_config",
    "deserialize_config",
    "load_config_json",
    "serialize_layout",
    "deserialize_layout",
    "save_layout_json",
    "load_layout_json",
]
