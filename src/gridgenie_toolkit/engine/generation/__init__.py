"""Layout generation: page templates and the generator pipeline."""

from .generator import GenerationMode, distribute, generate_layout
from .patterns import (
    CONTENT_PRIORITIES,
    FIXED_TEMPLATE,
    SINGLE_PAGE_PATTERNS,
    SPREAD_PATTERNS,
    LayoutPattern,
    PatternSlot,
)

__all__ = [
    "GenerationMode",
    "distribute",
    "generate_layout",
    "CONTENT_PRIORITIES",
    "FIXED_TEMPLATE",
    "SINGLE_PAGE_PATTERNS",
    "SPREAD_PATTERNS",
    "LayoutPattern",
    "PatternSlot",
]
