"""
Module: engine.generation.patterns

Purpose:
    Page templates used by the layout generator.

    - FIXED_TEMPLATE: the four-element skeleton emitted on every page
    - SINGLE_PAGE_PATTERNS / SPREAD_PATTERNS: named arrangements rotated
      page by page. Defined on a 3x4 reference grid per page (6x4 for a
      spread) and scaled to the configured grid.

Key Classes:
    - PatternSlot: One element of a pattern
    - LayoutPattern: Named list of slots on a reference grid

Key Functions:
    - slot_kind(): Element type and text role of a slot kind
    - scale_slot(): Map a slot from the reference grid onto the real grid
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from gridgenie_toolkit.core.models import ElementType, GridRect, SpreadPosition, TextRole

# Visual priority per content kind (higher draws the eye first)
CONTENT_PRIORITIES = {
    "title": 10,
    "subtitle": 8,
    "image": 7,
    "body": 6,
    "caption": 4,
}

_KINDS = {
    "title": (ElementType.TEXT, TextRole.HEADING),
    "subtitle": (ElementType.TEXT, TextRole.SUBHEADING),
    "body": (ElementType.TEXT, TextRole.BODY),
    "caption": (ElementType.TEXT, TextRole.CAPTION),
    "image": (ElementType.IMAGE, None),
}

REFERENCE_COLUMNS = 3
REFERENCE_ROWS = 4


def slot_kind(kind: str) -> tuple[ElementType, Optional[TextRole]]:
    """
    Example:
        >>> slot_kind("subtitle")
        (<ElementType.TEXT: 'text'>, <TextRole.SUBHEADING: 'subheading'>)
    """
    return _KINDS[kind]


@dataclass(frozen=True)
class PatternSlot:
    """
    One element of a pattern.

    Attributes:
        kind: "title", "subtitle", "body", "image" or "caption"
        grid_width / grid_height: Span on the reference grid
        preferred_x / preferred_y: Preferred origin on the reference grid
        spread_position: Spread constraint (spread patterns only)
    """
    kind: str
    grid_width: int
    grid_height: int
    preferred_x: int
    preferred_y: int
    spread_position: Optional[SpreadPosition] = None

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"Unknown slot kind: {self.kind}")

    @property
    def priority(self) -> int:
        return CONTENT_PRIORITIES[self.kind]


@dataclass(frozen=True)
class LayoutPattern:
    name: str
    slots: tuple[PatternSlot, ...]


def scale_slot(slot: PatternSlot, columns: int, rows: int) -> PatternSlot:
    """
    Map a slot from the reference grid onto a columns x rows page grid.

    Origins scale with floor, spans with round (at least 1). Spread slots
    scale the same way; their reference x runs over both pages.

    Example:
        >>> scale_slot(PatternSlot("title", 3, 1, 0, 0), 6, 8)
        PatternSlot(kind='title', grid_width=6, grid_height=2, preferred_x=0, preferred_y=0, spread_position=None)
    """
    fx = columns / REFERENCE_COLUMNS
    fy = rows / REFERENCE_ROWS
    return PatternSlot(
        kind=slot.kind,
        grid_width=max(1, round(slot.grid_width * fx)),
        grid_height=max(1, round(slot.grid_height * fy)),
        preferred_x=math.floor(slot.preferred_x * fx),
        preferred_y=math.floor(slot.preferred_y * fy),
        spread_position=slot.spread_position,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Fixed template
# ─────────────────────────────────────────────────────────────────────────────

FIXED_TEMPLATE: tuple[tuple[str, GridRect], ...] = (
    ("title", GridRect(0, 0, 4, 1)),
    ("body", GridRect(0, 2, 3, 3)),
    ("image", GridRect(4, 1, 2, 2)),
    ("caption", GridRect(4, 3, 2, 1)),
)


# ─────────────────────────────────────────────────────────────────────────────
# Single-page patterns (3x4 reference grid)
# ─────────────────────────────────────────────────────────────────────────────

SINGLE_PAGE_PATTERNS: tuple[LayoutPattern, ...] = (
    LayoutPattern("title-focus", (
        PatternSlot("title", 3, 1, 0, 0),
        PatternSlot("image", 2, 2, 0, 1),
        PatternSlot("body", 1, 2, 2, 1),
        PatternSlot("caption", 2, 1, 0, 3),
    )),
    LayoutPattern("balanced", (
        PatternSlot("title", 2, 1, 0, 0),
        PatternSlot("subtitle", 1, 1, 2, 0),
        PatternSlot("body", 2, 2, 0, 1),
        PatternSlot("image", 1, 2, 2, 1),
        PatternSlot("caption", 1, 1, 2, 3),
    )),
    LayoutPattern("image-dominant", (
        PatternSlot("title", 2, 1, 1, 0),
        PatternSlot("image", 2, 3, 0, 1),
        PatternSlot("body", 1, 2, 2, 1),
        PatternSlot("caption", 1, 1, 2, 3),
    )),
    LayoutPattern("text-heavy", (
        PatternSlot("title", 3, 1, 0, 0),
        PatternSlot("subtitle", 2, 1, 0, 1),
        PatternSlot("body", 2, 2, 0, 2),
        PatternSlot("image", 1, 1, 2, 1),
        PatternSlot("caption", 1, 1, 2, 2),
    )),
    LayoutPattern("asymmetric", (
        PatternSlot("title", 2, 1, 1, 0),
        PatternSlot("image", 1, 2, 0, 1),
        PatternSlot("body", 2, 2, 1, 1),
        PatternSlot("subtitle", 1, 1, 0, 3),
        PatternSlot("caption", 2, 1, 1, 3),
    )),
    LayoutPattern("minimal", (
        PatternSlot("title", 2, 1, 0, 0),
        PatternSlot("body", 2, 2, 0, 1),
        PatternSlot("image", 1, 2, 2, 0),
        PatternSlot("caption", 1, 1, 2, 2),
    )),
)


# ─────────────────────────────────────────────────────────────────────────────
# Spread patterns (6x4 reference grid: columns 0-2 left page, 3-5 right)
# ─────────────────────────────────────────────────────────────────────────────

_L = SpreadPosition.LEFT
_R = SpreadPosition.RIGHT
_C = SpreadPosition.CENTER
_S = SpreadPosition.SPAN

SPREAD_PATTERNS: tuple[LayoutPattern, ...] = (
    LayoutPattern("spread-hero", (
        PatternSlot("title", 6, 1, 0, 0, _S),
        PatternSlot("image", 4, 3, 0, 1, _L),
        PatternSlot("body", 2, 2, 4, 1, _R),
        PatternSlot("caption", 2, 1, 4, 3, _R),
    )),
    LayoutPattern("spread-balanced", (
        PatternSlot("title", 3, 1, 0, 0, _L),
        PatternSlot("subtitle", 3, 1, 3, 0, _R),
        PatternSlot("body", 2, 3, 0, 1, _L),
        PatternSlot("image", 2, 2, 2, 1, _C),
        PatternSlot("body", 2, 2, 4, 1, _R),
        PatternSlot("caption", 2, 1, 4, 3, _R),
    )),
    LayoutPattern("spread-magazine", (
        PatternSlot("title", 4, 1, 1, 0, _C),
        PatternSlot("image", 3, 2, 0, 1, _L),
        PatternSlot("body", 3, 2, 3, 1, _R),
        PatternSlot("subtitle", 2, 1, 0, 3, _L),
        PatternSlot("caption", 2, 1, 4, 3, _R),
    )),
    LayoutPattern("spread-asymmetric", (
        PatternSlot("title", 3, 1, 2, 0, _R),
        PatternSlot("image", 2, 3, 0, 1, _L),
        PatternSlot("body", 2, 2, 2, 1, _C),
        PatternSlot("image", 2, 1, 4, 1, _R),
        PatternSlot("caption", 2, 1, 4, 2, _R),
    )),
    LayoutPattern("spread-text-focus", (
        PatternSlot("title", 4, 1, 1, 0, _C),
        PatternSlot("subtitle", 2, 1, 0, 1, _L),
        PatternSlot("body", 3, 2, 0, 2, _L),
        PatternSlot("body", 2, 3, 4, 1, _R),
        PatternSlot("image", 1, 2, 3, 2, _C),
    )),
    LayoutPattern("spread-visual", (
        PatternSlot("image", 4, 2, 1, 0, _C),
        PatternSlot("title", 2, 1, 0, 2, _L),
        PatternSlot("subtitle", 2, 1, 4, 2, _R),
        PatternSlot("body", 3, 1, 0, 3, _L),
        PatternSlot("caption", 3, 1, 3, 3, _R),
    )),
)
