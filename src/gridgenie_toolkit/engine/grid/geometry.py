"""
Module: engine.grid.geometry

Purpose:
    Projection between grid space (cells) and page space (mm) for one page.

    Forward:  position = cell * (cell_size + spacing) + margin
              size     = span * cell_size + (span - 1) * spacing
    Backward: origin   = floor((position - margin) / (cell_size + spacing))
              span     = ceil(size / (cell_size + spacing))

    The backward projection is lossy: it recovers the origin exactly for
    grid-aligned elements and a span at least as large as the original.

Key Classes:
    - GridGeometry: Cell size, margins and the two projections

Used By:
    - engine.placement.factory: Grid -> mm
    - engine.placement.finder: mm -> grid for existing elements
    - engine.session: Re-snapping edited elements
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from gridgenie_toolkit.common.thresholds import PLACEMENT_THRESHOLDS
from gridgenie_toolkit.core.models.config import GridSizeMode, LayoutConfig
from gridgenie_toolkit.core.models.plans import GridRect


@dataclass(frozen=True)
class GridGeometry:
    """
    Grid metrics of a single page.

    Attributes:
        columns / rows: Cell counts
        cell_width / cell_height: Cell size in mm
        spacing_x / spacing_y: Space between cells in mm
        origin_x / origin_y: Page-space position of cell (0, 0) (the margins)
    """
    columns: int
    rows: int
    cell_width: float
    cell_height: float
    spacing_x: float
    spacing_y: float
    origin_x: float
    origin_y: float

    @classmethod
    def for_page(
        cls,
        config: LayoutConfig,
        page: int = 1,
        *,
        columns: Optional[int] = None,
        rows: Optional[int] = None,
    ) -> GridGeometry:
        """
        Resolve grid metrics for a page.

        Count mode divides the page (or, with fit_grid_to_margins, the
        content area) by the column/row count. Size mode uses the fixed
        cell size and derives how many cells fit in the content area.
        Explicit columns/rows override the counts in either mode; in size
        mode the cell size stays fixed.
        """
        spacing_x = config.grid_spacing_x
        spacing_y = config.grid_spacing_y
        origin_x = config.left_margin_for(page)
        origin_y = config.margin_top

        if config.grid_size_mode is GridSizeMode.SIZE:
            cell_width = config.grid_cell_width
            cell_height = config.grid_cell_height
            if columns is None:
                columns = math.floor((config.content_width + spacing_x) / (cell_width + spacing_x))
            if rows is None:
                rows = math.floor((config.content_height + spacing_y) / (cell_height + spacing_y))
            return cls(
                max(1, columns), max(1, rows),
                cell_width, cell_height, spacing_x, spacing_y, origin_x, origin_y,
            )

        n_cols = max(1, columns if columns is not None else config.columns)
        n_rows = max(1, rows if rows is not None else config.rows)
        if config.fit_grid_to_margins:
            cell_width = (config.content_width - (n_cols - 1) * spacing_x) / n_cols
            cell_height = (config.content_height - (n_rows - 1) * spacing_y) / n_rows
        else:
            cell_width = config.page_width / n_cols
            cell_height = config.page_height / n_rows
        # Degenerate margins can leave no room; keep cells usable
        cell_width = max(cell_width, 1.0)
        cell_height = max(cell_height, 1.0)
        return cls(n_cols, n_rows, cell_width, cell_height, spacing_x, spacing_y, origin_x, origin_y)

    @property
    def pitch_x(self) -> float:
        """Distance between the left edges of adjacent columns."""
        return self.cell_width + self.spacing_x

    @property
    def pitch_y(self) -> float:
        return self.cell_height + self.spacing_y

    # ─────────────────────────────────────────────────────────────────────────
    # Grid -> page
    # ─────────────────────────────────────────────────────────────────────────

    def cell_x(self, grid_x: int) -> float:
        return grid_x * self.pitch_x + self.origin_x

    def cell_y(self, grid_y: int) -> float:
        return grid_y * self.pitch_y + self.origin_y

    def span_width(self, span: int) -> float:
        return span * self.cell_width + (span - 1) * self.spacing_x

    def span_height(self, span: int) -> float:
        return span * self.cell_height + (span - 1) * self.spacing_y

    # ─────────────────────────────────────────────────────────────────────────
    # Page -> grid
    # ─────────────────────────────────────────────────────────────────────────

    def to_grid(self, x: float, y: float, width: float, height: float) -> GridRect:
        """
        Back-project absolute geometry to a cell footprint.

        Origins are floored and clamped at 0; spans are ceiled and at least 1.
        The footprint may extend past the grid; callers clip it.
        """
        eps = PLACEMENT_THRESHOLDS.grid_epsilon
        grid_x = max(0, math.floor((x - self.origin_x) / self.pitch_x + eps))
        grid_y = max(0, math.floor((y - self.origin_y) / self.pitch_y + eps))
        span_w = max(1, math.ceil(width / self.pitch_x - eps))
        span_h = max(1, math.ceil(height / self.pitch_y - eps))
        return GridRect(grid_x, grid_y, span_w, span_h)

    def snap(self, x: float, y: float, width: float, height: float) -> GridRect:
        """
        Nearest cell footprint for free-form geometry.

        Unlike to_grid(), rounds to the nearest cell and clamps the result
        inside the grid.
        """
        grid_x = round((x - self.origin_x) / self.pitch_x)
        grid_y = round((y - self.origin_y) / self.pitch_y)
        span_w = max(1, round((width + self.spacing_x) / self.pitch_x))
        span_h = max(1, round((height + self.spacing_y) / self.pitch_y))
        span_w = min(span_w, self.columns)
        span_h = min(span_h, self.rows)
        grid_x = min(max(0, grid_x), self.columns - span_w)
        grid_y = min(max(0, grid_y), self.rows - span_h)
        return GridRect(grid_x, grid_y, span_w, span_h)
