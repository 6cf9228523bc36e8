"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation inside the placement algorithms
2. Edits happen in one place (engine.session) by building replacements
3. Plans and footprints can be used as dict keys or in sets

Elements are a tagged union (TextElement / ImageElement over a shared
LayoutElement base) rather than one object with many optional fields.
"""

from .kinds import ElementType, TextRole, TextAlign
from .config import LayoutConfig, GridSizeMode
from .plans import GridPosition, GridRect, ElementPlan, SpreadPosition
from .elements import LayoutElement, TextElement, ImageElement, element_from_dict
from .layout import GeneratedLayout, LayoutMetadata, PageDimensions

__all__ = [
    "ElementType",
    "TextRole",
    "TextAlign",
    "LayoutConfig",
    "GridSizeMode",
    "GridPosition",
    "GridRect",
    "ElementPlan",
    "SpreadPosition",
    "LayoutElement",
    "TextElement",
    "ImageElement",
    "element_from_dict",
    "GeneratedLayout",
    "LayoutMetadata",
    "PageDimensions",
]
