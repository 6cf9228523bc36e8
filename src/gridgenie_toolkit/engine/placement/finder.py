"""
Module: engine.placement.finder

Purpose:
    Find a free grid slot on a page that already holds elements. Occupancy
    is rebuilt from the elements on every call and discarded afterwards.

Key Functions:
    - find_next_available_position(): First free slot, or (0, 0) when full
    - page_occupancy(): Occupancy map reconstructed from elements

Footprints:
    An element's recorded grid footprint is used when present. Elements
    moved or resized off-grid have none; their footprint is back-projected
    from absolute geometry (floor for origin, ceil for span), which can
    over-reserve cells but never under-reserves them.

Used By:
    - engine.session: Interactive element addition
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from gridgenie_toolkit.core.models import GridPosition, GridRect, LayoutConfig, LayoutElement
from gridgenie_toolkit.engine.grid.geometry import GridGeometry
from gridgenie_toolkit.engine.grid.occupancy import GridOccupancy

logger = logging.getLogger(__name__)


def element_footprint(element: LayoutElement, geometry: GridGeometry) -> GridRect:
    """Recorded footprint, or the back-projection of absolute geometry."""
    if element.grid is not None:
        return element.grid
    return geometry.to_grid(element.x, element.y, element.width, element.height)


def page_occupancy(
    existing_elements: Iterable[LayoutElement],
    page: int,
    columns: int,
    rows: int,
    *,
    config: Optional[LayoutConfig] = None,
) -> GridOccupancy:
    """
    Build the occupancy map of one page from its elements.

    Footprints extending past the grid are clipped. Elements on other
    pages are ignored.
    """
    config = config or LayoutConfig()
    geometry = GridGeometry.for_page(config, page, columns=columns, rows=rows)
    occupancy = GridOccupancy(columns, rows)
    for element in existing_elements:
        if element.page != page:
            continue
        occupancy.occupy_rect(element_footprint(element, geometry))
    return occupancy


def find_next_available_position(
    existing_elements: Iterable[LayoutElement],
    page: int,
    columns: int,
    rows: int,
    element_width: int,
    element_height: int,
    *,
    config: Optional[LayoutConfig] = None,
) -> GridPosition:
    """
    Find the first free element_width x element_height slot on a page.

    Scans row-major (top to bottom, left to right). Never raises: when no
    slot fits, returns GridPosition(0, 0) and logs a warning, so the new
    element may overlap existing ones.

    Args:
        existing_elements: Elements of the whole layout
        page: Page to search
        columns / rows: Grid dimensions
        element_width / element_height: Requested span in cells
        config: Page geometry for back-projection (default LayoutConfig())

    Returns:
        GridPosition of the slot

    Example:
        >>> find_next_available_position([], 1, 6, 8, 3, 2)
        GridPosition(grid_x=0, grid_y=0)
    """
    occupancy = page_occupancy(existing_elements, page, columns, rows, config=config)
    position = occupancy.find_available_space(element_width, element_height)
    if position is None:
        logger.warning(
            f"No free {element_width}x{element_height} slot on page {page} "
            f"({occupancy.occupied_count}/{occupancy.capacity} cells occupied), "
            f"falling back to (0, 0)"
        )
        return GridPosition(0, 0)
    logger.debug(f"Next free {element_width}x{element_height} slot on page {page}: {position}")
    return position
