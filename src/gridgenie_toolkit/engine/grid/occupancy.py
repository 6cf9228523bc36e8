"""
Module: engine.grid.occupancy

Purpose:
    Boolean occupancy map over the grid cells of one page (or one spread).
    Used by the generator while placing a page and by the position finder
    when the editor adds an element. Never raises: out-of-range requests
    are simply not placeable, and out-of-range cells are skipped on occupy.

Key Classes:
    - GridOccupancy: Cell map with first-fit search

Algorithm:
    Row-major first fit. For y in 0..rows-h, for x in 0..columns-w, return
    the first (x, y) whose h x w rectangle is entirely free. Deterministic:
    the result is a pure function of the bitmap and the requested size.
    Cost O(rows x columns x w x h), fine for grids up to 24 x 32.

Used By:
    - engine.placement.finder: Interactive element addition
    - engine.generation.generator: Per-page planning
"""

from __future__ import annotations

import logging
from typing import Optional

from gridgenie_toolkit.core.models.plans import GridPosition, GridRect, SpreadPosition

logger = logging.getLogger(__name__)


class GridOccupancy:
    """
    Occupancy map for one page or spread.

    In spread mode the map is twice as wide: columns [0, columns) are the
    left-hand page and [columns, 2 * columns) the right-hand page.

    Example:
        >>> grid = GridOccupancy(6, 8)
        >>> grid.find_available_space(3, 2)
        GridPosition(grid_x=0, grid_y=0)
        >>> grid.occupy(0, 0, 3, 2)
        >>> grid.find_available_space(3, 2)
        GridPosition(grid_x=3, grid_y=0)
    """

    def __init__(self, columns: int, rows: int, *, spread: bool = False) -> None:
        self.columns = max(0, columns)
        self.rows = max(0, rows)
        self.spread = spread
        self._cells: list[list[bool]] = []
        self.reset()

    @property
    def total_columns(self) -> int:
        return self.columns * 2 if self.spread else self.columns

    @property
    def capacity(self) -> int:
        return self.total_columns * self.rows

    @property
    def occupied_count(self) -> int:
        return sum(row.count(True) for row in self._cells)

    @property
    def free_count(self) -> int:
        return self.capacity - self.occupied_count

    def reset(self) -> None:
        """Clear all occupancy."""
        self._cells = [[False] * self.total_columns for _ in range(self.rows)]

    def is_occupied(self, x: int, y: int) -> bool:
        """Occupancy of one cell; out-of-range cells report occupied."""
        if not (0 <= x < self.total_columns and 0 <= y < self.rows):
            return True
        return self._cells[y][x]

    def can_place(self, x: int, y: int, width: int, height: int) -> bool:
        """
        Check whether a width x height rectangle at (x, y) is in bounds and free.

        Non-positive spans are never placeable.
        """
        if width <= 0 or height <= 0:
            return False
        if x < 0 or y < 0 or x + width > self.total_columns or y + height > self.rows:
            return False
        for row in range(y, y + height):
            cells = self._cells[row]
            for col in range(x, x + width):
                if cells[col]:
                    return False
        return True

    def occupy(self, x: int, y: int, width: int, height: int) -> None:
        """Mark every in-bounds cell of the rectangle occupied."""
        for row in range(max(0, y), min(self.rows, y + height)):
            cells = self._cells[row]
            for col in range(max(0, x), min(self.total_columns, x + width)):
                cells[col] = True

    def occupy_rect(self, rect: GridRect) -> None:
        self.occupy(rect.x, rect.y, rect.width, rect.height)

    def find_available_space(
        self,
        width: int,
        height: int,
        preferred_x: Optional[int] = None,
        preferred_y: Optional[int] = None,
        spread_position: Optional[SpreadPosition] = None,
    ) -> Optional[GridPosition]:
        """
        Find a free width x height rectangle.

        Without preferences this is a plain row-major first fit over the
        whole grid. A preferred position (both coordinates required) is
        tried first. In spread mode, spread_position limits the columns
        searched.

        Args:
            width: Span in columns
            height: Span in rows
            preferred_x: Preferred column (used only with preferred_y)
            preferred_y: Preferred row (used only with preferred_x)
            spread_position: Spread constraint (spread mode only)

        Returns:
            GridPosition of the first fit, or None if nothing fits.
        """
        start_x, end_x = self._search_window(width, spread_position)

        if preferred_x is not None and preferred_y is not None:
            x = preferred_x
            if self.spread and spread_position is not None:
                x = max(start_x, min(preferred_x, end_x))
            if self.can_place(x, preferred_y, width, height):
                return GridPosition(x, preferred_y)

        for y in range(0, self.rows - height + 1):
            for x in range(start_x, end_x + 1):
                if self.can_place(x, y, width, height):
                    return GridPosition(x, y)
        return None

    def _search_window(
        self, width: int, spread_position: Optional[SpreadPosition]
    ) -> tuple[int, int]:
        """Inclusive [start, end] range of origin columns to scan."""
        end = self.total_columns - width
        if not self.spread or spread_position is None:
            return 0, end
        if spread_position is SpreadPosition.LEFT:
            return 0, self.columns - width
        if spread_position is SpreadPosition.RIGHT:
            return self.columns, end
        if spread_position is SpreadPosition.CENTER:
            half = width // 2
            return max(0, self.columns - half), min(end, self.columns + half)
        return 0, end

    def __repr__(self) -> str:
        return (
            f"GridOccupancy({self.total_columns}x{self.rows}, "
            f"{self.occupied_count}/{self.capacity} occupied)"
        )
