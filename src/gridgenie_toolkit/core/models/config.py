"""
Module: core.models.config

Purpose:
    Immutable layout configuration produced by the configuration UI (or a
    JSON file) and consumed read-only by the placement engine.

Key Classes:
    - LayoutConfig: Page geometry, grid definition, typography and content mix
    - GridSizeMode: Grid defined by cell count or by fixed cell size

Dependencies:
    - dataclasses (std)
    - gridgenie_toolkit.common.page_sizes: Page-size lookup

Used By:
    - engine.grid.geometry: Cell size and margin resolution
    - engine.placement.factory: Element geometry and typography
    - engine.generation.generator: Page iteration and content counts
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

from gridgenie_toolkit.common.page_sizes import get_page_size


class GridSizeMode(str, Enum):
    """How the grid is defined: by column/row count or by fixed cell size."""

    COUNT = "count"
    SIZE = "size"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Layout configuration (immutable).

    All lengths are millimetres unless noted. Defaults mirror the design
    tool's initial state.

    Attributes:
        page_size: Page-size id ("A4", "trade-paperback", "custom", ...)
        custom_width: Width used when page_size is "custom"
        custom_height: Height used when page_size is "custom"
        page_count: Number of document pages
        orientation: Optional "portrait"/"landscape" override
        margin_top / margin_bottom / margin_left / margin_right: Page margins
        margin_inner / margin_outer: Facing-page margins (spread view)
        columns / rows: Grid cell counts
        grid_spacing_x / grid_spacing_y: Spacing between cells
        grid_size_mode: COUNT (columns/rows) or SIZE (fixed cell size)
        grid_cell_width / grid_cell_height: Cell size for SIZE mode
        fit_grid_to_margins: Divide the content area instead of the page
        binding_type / binding_gutter / bleed / gsm: Print settings
        image_count / text_count: Desired element mix for the document
        aesthetic_rule: "golden-ratio", "rule-of-thirds" or "fibonacci"
        grid_system: Grid system name recorded in metadata
        content_type: Content profile recorded in metadata
        layout_density: UI density slider (0-100)
        enable_smart_placement: UI flag, recorded but not consulted
        spread_view: Lay out facing pages as spreads
        snap_to_grid: Re-snap edited elements to grid cells
        primary_font / base_font_size / base_leading / text_color: Typography
        enable_justification: Justify body text

    Example:
        >>> config = LayoutConfig(columns=6, rows=8)
        >>> config.page_width, config.page_height
        (210, 297)
    """

    # Page
    page_size: str = "A4"
    custom_width: float = 210
    custom_height: float = 297
    page_count: int = 5
    orientation: Optional[str] = None

    # Margins
    margin_top: float = 20
    margin_bottom: float = 20
    margin_left: float = 15
    margin_right: float = 15
    margin_inner: float = 25
    margin_outer: float = 15

    # Grid
    columns: int = 6
    rows: int = 8
    grid_spacing_x: float = 5
    grid_spacing_y: float = 5
    grid_size_mode: GridSizeMode = GridSizeMode.COUNT
    grid_cell_width: float = 25
    grid_cell_height: float = 20
    fit_grid_to_margins: bool = False

    # Binding and printing
    binding_type: str = "perfect"
    binding_gutter: float = 6
    bleed: float = 3
    gsm: float = 170

    # Content
    image_count: int = 3
    text_count: int = 4
    aesthetic_rule: str = "golden-ratio"
    grid_system: str = "modular"
    content_type: str = "custom"
    layout_density: int = 60
    enable_smart_placement: bool = True

    # Spread and editing
    spread_view: bool = False
    snap_to_grid: bool = True

    # Typography
    primary_font: str = "Inter"
    base_font_size: float = 11
    base_leading: float = 1.4
    text_color: str = "#000000"
    enable_justification: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if isinstance(self.grid_size_mode, str) and not isinstance(self.grid_size_mode, GridSizeMode):
            object.__setattr__(self, "grid_size_mode", GridSizeMode(self.grid_size_mode))
        if self.columns < 1:
            raise ValueError(f"columns must be >= 1: {self.columns}")
        if self.rows < 1:
            raise ValueError(f"rows must be >= 1: {self.rows}")
        if self.grid_spacing_x < 0 or self.grid_spacing_y < 0:
            raise ValueError(
                f"grid spacing must be non-negative: ({self.grid_spacing_x}, {self.grid_spacing_y})"
            )
        if self.page_count < 1:
            raise ValueError(f"page_count must be >= 1: {self.page_count}")
        if self.custom_width <= 0 or self.custom_height <= 0:
            raise ValueError(
                f"custom dimensions must be positive: {self.custom_width}x{self.custom_height}"
            )
        for name in ("margin_top", "margin_bottom", "margin_left",
                     "margin_right", "margin_inner", "margin_outer"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative: {getattr(self, name)}")
        if self.image_count < 0 or self.text_count < 0:
            raise ValueError("element counts must be non-negative")
        if self.base_font_size <= 0:
            raise ValueError(f"base_font_size must be positive: {self.base_font_size}")
        if self.grid_size_mode is GridSizeMode.SIZE and (
            self.grid_cell_width <= 0 or self.grid_cell_height <= 0
        ):
            raise ValueError("grid cell size must be positive in size mode")

    # ─────────────────────────────────────────────────────────────────────────
    # Page geometry
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def _base_dimensions(self) -> tuple[float, float]:
        if self.page_size == "custom":
            return self.custom_width, self.custom_height
        size = get_page_size(self.page_size)
        return size.width, size.height

    @property
    def page_width(self) -> float:
        """Page width in mm after orientation is applied."""
        width, height = self._base_dimensions
        if self.orientation == "landscape":
            return max(width, height)
        if self.orientation == "portrait":
            return min(width, height)
        return width

    @property
    def page_height(self) -> float:
        """Page height in mm after orientation is applied."""
        width, height = self._base_dimensions
        if self.orientation == "landscape":
            return min(width, height)
        if self.orientation == "portrait":
            return max(width, height)
        return height

    @property
    def content_width(self) -> float:
        """Width inside the left/right margins."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        """Height inside the top/bottom margins."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def requested_elements(self) -> int:
        """Total image and text elements requested for the document."""
        return self.image_count + self.text_count

    def left_margin_for(self, page: int) -> float:
        """
        Left margin of a page.

        Single pages use margin_left. In spread view odd pages are left-hand
        pages (outer margin on the left) and even pages are right-hand pages
        (inner margin on the left).
        """
        if not self.spread_view:
            return self.margin_left
        return self.margin_outer if page % 2 == 1 else self.margin_inner

    def right_margin_for(self, page: int) -> float:
        """Right margin of a page; the mirror of left_margin_for()."""
        if not self.spread_view:
            return self.margin_right
        return self.margin_inner if page % 2 == 1 else self.margin_outer

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (snake_case keys)."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["grid_size_mode"] = self.grid_size_mode.value
        return data

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))
