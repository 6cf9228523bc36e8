"""
Module: core.models.plans

Purpose:
    Grid-space value types used by the placement engine before absolute
    geometry is committed.

Key Classes:
    - GridPosition: Integer cell coordinate
    - GridRect: Cell footprint (origin + span)
    - ElementPlan: Planned element in grid space with priority and role
    - SpreadPosition: Horizontal constraint for spread layouts

Used By:
    - engine.grid.occupancy: Search results
    - engine.placement.aesthetics: Rule application
    - engine.generation.generator: Page planning
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional

from .kinds import ElementType, TextRole


class SpreadPosition(str, Enum):
    """Where an element may sit within a two-page spread."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    SPAN = "span"


@dataclass(frozen=True)
class GridPosition:
    """
    Cell coordinate on a page grid.

    Example:
        >>> GridPosition(3, 0)
        GridPosition(grid_x=3, grid_y=0)
    """
    grid_x: int
    grid_y: int


@dataclass(frozen=True)
class GridRect:
    """
    Rectangular cell footprint.

    Attributes:
        x: Left column (inclusive)
        y: Top row (inclusive)
        width: Span in columns
        height: Span in rows

    Example:
        >>> r = GridRect(1, 2, 2, 1)
        >>> list(r.cells())
        [(1, 2), (2, 2)]
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield covered (column, row) cells in row-major order."""
        for row in range(self.y, self.y + self.height):
            for col in range(self.x, self.x + self.width):
                yield col, row

    def overlaps(self, other: GridRect) -> bool:
        """True if the two footprints share at least one cell."""
        return not (
            self.right <= other.x or other.right <= self.x
            or self.bottom <= other.y or other.bottom <= self.y
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> GridRect:
        return cls(x=data["x"], y=data["y"], width=data["width"], height=data["height"])


@dataclass(frozen=True)
class ElementPlan:
    """
    An element planned in grid space.

    Attributes:
        id: Plan identifier (stable within one generation pass)
        element_type: TEXT or IMAGE
        grid_x / grid_y: Cell origin
        grid_width / grid_height: Span in cells
        priority: 1-10, higher is more visually dominant
        text_role: Role for text plans
        linked_to: Id of a plan this one flows from (reserved)
        spread_position: Spread constraint, if any
        page: 1-based page the plan belongs to
    """
    id: str
    element_type: ElementType
    grid_x: int
    grid_y: int
    grid_width: int
    grid_height: int
    priority: int = 5
    text_role: Optional[TextRole] = None
    linked_to: Optional[str] = None
    spread_position: Optional[SpreadPosition] = None
    page: int = 1

    @property
    def rect(self) -> GridRect:
        return GridRect(self.grid_x, self.grid_y, self.grid_width, self.grid_height)

    def moved_to(self, grid_x: int, grid_y: int) -> ElementPlan:
        return replace(self, grid_x=grid_x, grid_y=grid_y)

    def resized_to(self, grid_width: int, grid_height: int) -> ElementPlan:
        return replace(self, grid_width=grid_width, grid_height=grid_height)
