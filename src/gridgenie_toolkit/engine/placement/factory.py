"""
Module: engine.placement.factory

Purpose:
    Build LayoutElements from a grid footprint and the active config.
    The factory is the only place where grid coordinates become absolute
    geometry, so every created element records the footprint it came from.

Key Classes:
    - ElementFactory: Creates text and image elements

Key Functions:
    - create_text_element(): Module-level shortcut using a default factory
    - create_image_element(): Module-level shortcut using a default factory

Geometry:
    x      = grid_x * (cell_width + spacing_x) + left margin
    y      = grid_y * (cell_height + spacing_y) + margin_top
    width  = span_w * cell_width + (span_w - 1) * spacing_x
    height = span_h * cell_height + (span_h - 1) * spacing_y
    then clamped to x, y >= 0 and the minimum visible sizes.

Used By:
    - engine.generation.generator: Page templates and patterns
    - engine.session: Interactive element addition
"""

from __future__ import annotations

import logging
from typing import Optional

from gridgenie_toolkit.common.thresholds import PLACEMENT_THRESHOLDS, PlacementThresholds
from gridgenie_toolkit.core.models import (
    ElementType,
    GridRect,
    ImageElement,
    LayoutConfig,
    TextAlign,
    TextElement,
    TextRole,
)
from gridgenie_toolkit.engine.grid.geometry import GridGeometry
from gridgenie_toolkit.engine.text.lorem import LoremGenerator, TextProvider, estimate_text_metrics

from .ids import IdProvider, TimestampIdProvider

logger = logging.getLogger(__name__)

# Static placeholder copy for the non-body roles
HEADING_TEXT = "Headline Goes Here"
SUBHEADING_TEXT = "A supporting subheading"
CAPTION_TEXT = "Caption text for image descriptions."

IMAGE_URL_TEMPLATE = "/placeholder.svg?height={height}&width={width}&text=Image+{page}"


class ElementFactory:
    """
    Creates elements from grid footprints.

    Ids and body text come from injectable providers; both default to the
    non-deterministic implementations.

    Example:
        >>> factory = ElementFactory(id_provider=SequentialIdProvider())
        >>> element = factory.create_image_element(LayoutConfig(), 1, 4, 1, 2, 2)
        >>> element.id, element.grid
        ('image-1', GridRect(x=4, y=1, width=2, height=2))
    """

    def __init__(
        self,
        id_provider: Optional[IdProvider] = None,
        text_provider: Optional[TextProvider] = None,
        thresholds: PlacementThresholds = PLACEMENT_THRESHOLDS,
    ) -> None:
        self.id_provider = id_provider or TimestampIdProvider()
        self.text_provider = text_provider or LoremGenerator()
        self.thresholds = thresholds

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def absolute_geometry(
        self,
        config: LayoutConfig,
        page: int,
        rect: GridRect,
        element_type: ElementType,
    ) -> tuple[float, float, float, float, GridRect]:
        """
        Absolute (x, y, width, height) in mm for a footprint, plus the
        normalized footprint (non-negative origin, spans of at least 1).
        """
        grid_x, grid_y, grid_width, grid_height = rect.x, rect.y, rect.width, rect.height
        min_height = (
            self.thresholds.min_image_height
            if element_type is ElementType.IMAGE
            else self.thresholds.min_text_height
        )
        if grid_width <= 0 or grid_height <= 0:
            logger.debug(
                f"Non-positive span {grid_width}x{grid_height} on page {page}, using 1"
            )
        grid_width = max(1, grid_width)
        grid_height = max(1, grid_height)
        grid_x = max(0, grid_x)
        grid_y = max(0, grid_y)

        geometry = GridGeometry.for_page(config, page)
        x = max(0.0, geometry.cell_x(grid_x))
        y = max(0.0, geometry.cell_y(grid_y))
        width = max(self.thresholds.min_element_width, geometry.span_width(grid_width))
        height = max(min_height, geometry.span_height(grid_height))
        return x, y, width, height, GridRect(grid_x, grid_y, grid_width, grid_height)

    # ─────────────────────────────────────────────────────────────────────────
    # Element creation
    # ─────────────────────────────────────────────────────────────────────────

    def create_text_element(
        self,
        config: LayoutConfig,
        page: int,
        grid_x: int,
        grid_y: int,
        grid_width: int,
        grid_height: int,
        text_type: TextRole | str = TextRole.BODY,
        *,
        priority: int = 5,
    ) -> TextElement:
        """
        Create a text element.

        Font size, leading and content depend on the role: headings,
        subheadings and captions get static copy at a scaled font size,
        body text gets placeholder text sized to the box.

        Args:
            config: Active layout configuration
            page: 1-based page number
            grid_x / grid_y: Cell origin
            grid_width / grid_height: Span in cells (non-positive -> 1)
            text_type: Text role or role name (legacy names accepted)
            priority: Visual priority 1-10

        Returns:
            TextElement with its grid footprint recorded
        """
        role = TextRole.parse(text_type)
        x, y, width, height, rect = self.absolute_geometry(
            config, page, GridRect(grid_x, grid_y, grid_width, grid_height), ElementType.TEXT
        )

        t = self.thresholds
        base = config.base_font_size
        text_align = TextAlign.LEFT
        font_weight = "normal"
        if role is TextRole.HEADING:
            font_size = base * t.heading_scale
            leading = t.heading_leading
            font_weight = "bold"
            content = HEADING_TEXT
        elif role is TextRole.SUBHEADING:
            font_size = base * t.subheading_scale
            leading = t.subheading_leading
            font_weight = "600"
            content = SUBHEADING_TEXT
        elif role is TextRole.CAPTION:
            font_size = base * t.caption_scale
            leading = t.caption_leading
            content = CAPTION_TEXT
        else:
            font_size = base * t.body_scale
            leading = config.base_leading
            metrics = estimate_text_metrics(width, height, font_size, leading, t)
            content = self.text_provider.body_text(metrics.words)
            if config.enable_justification:
                text_align = TextAlign.JUSTIFY

        element = TextElement(
            id=self.id_provider.element_id(ElementType.TEXT.value),
            x=x,
            y=y,
            width=width,
            height=height,
            page=page,
            content=content,
            priority=priority,
            grid=rect,
            role=role,
            font_size=font_size,
            font_family=config.primary_font,
            font_weight=font_weight,
            color=config.text_color,
            text_align=text_align,
            leading=leading,
        )
        logger.debug(
            f"Created {role.value} text {element.id} on page {page} at "
            f"grid ({rect.x}, {rect.y}) {rect.width}x{rect.height}"
        )
        return element

    def create_image_element(
        self,
        config: LayoutConfig,
        page: int,
        grid_x: int,
        grid_y: int,
        grid_width: int,
        grid_height: int,
        *,
        priority: int = 5,
    ) -> ImageElement:
        """
        Create an image placeholder.

        Content is a placeholder-image URL encoding the element's rounded
        size and its page number.
        """
        x, y, width, height, rect = self.absolute_geometry(
            config, page, GridRect(grid_x, grid_y, grid_width, grid_height), ElementType.IMAGE
        )
        element = ImageElement(
            id=self.id_provider.element_id(ElementType.IMAGE.value),
            x=x,
            y=y,
            width=width,
            height=height,
            page=page,
            content=IMAGE_URL_TEMPLATE.format(
                height=round(height), width=round(width), page=page
            ),
            priority=priority,
            grid=rect,
        )
        logger.debug(
            f"Created image {element.id} on page {page} at "
            f"grid ({rect.x}, {rect.y}) {rect.width}x{rect.height}"
        )
        return element

    def create_element(
        self,
        element_type: ElementType,
        config: LayoutConfig,
        page: int,
        rect: GridRect,
        *,
        role: Optional[TextRole] = None,
        priority: int = 5,
    ) -> TextElement | ImageElement:
        """Dispatch on element type; role applies to text only."""
        if element_type is ElementType.IMAGE:
            return self.create_image_element(
                config, page, rect.x, rect.y, rect.width, rect.height, priority=priority
            )
        return self.create_text_element(
            config, page, rect.x, rect.y, rect.width, rect.height,
            role or TextRole.BODY, priority=priority,
        )


_default_factory: Optional[ElementFactory] = None


def _get_default_factory() -> ElementFactory:
    global _default_factory
    if _default_factory is None:
        _default_factory = ElementFactory()
    return _default_factory


def create_text_element(
    config: LayoutConfig,
    page: int,
    grid_x: int,
    grid_y: int,
    grid_width: int,
    grid_height: int,
    text_type: TextRole | str = TextRole.BODY,
) -> TextElement:
    """Create a text element with the default factory."""
    return _get_default_factory().create_text_element(
        config, page, grid_x, grid_y, grid_width, grid_height, text_type
    )


def create_image_element(
    config: LayoutConfig,
    page: int,
    grid_x: int,
    grid_y: int,
    grid_width: int,
    grid_height: int,
) -> ImageElement:
    """Create an image element with the default factory."""
    return _get_default_factory().create_image_element(
        config, page, grid_x, grid_y, grid_width, grid_height
    )
