"""
Module: core.models.layout

Purpose:
    The GeneratedLayout aggregate: every placed element of a document plus
    page dimensions and generation metadata.

Key Classes:
    - PageDimensions: Page (or spread) size in mm
    - LayoutMetadata: How the layout was generated
    - GeneratedLayout: Top-level aggregate

Used By:
    - engine.generation.generator: Creates layouts
    - engine.session: Replaces layouts on edit
    - output.*: Exports layouts
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Optional

from .config import LayoutConfig
from .elements import LayoutElement


@dataclass(frozen=True)
class PageDimensions:
    """
    Page or spread size in mm.

    Example:
        >>> PageDimensions(210, 297).aspect_ratio
        0.7070707070707071
    """
    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height, "aspect_ratio": self.aspect_ratio}


@dataclass(frozen=True)
class LayoutMetadata:
    """
    Generation metadata.

    Attributes:
        aesthetic_rule: Rule selected in the config
        grid_system: Grid system name from the config
        grid_size: "{columns}x{rows}" of the placement grid
        generated_at: Generation timestamp
        element_count: Number of elements in the layout
        is_spread: Whether pages were laid out as spreads
        content_type: Content profile from the config
        generation_mode: Generator mode used ("fixed", "counts", "patterns")
        spine_width: Spine width in mm for the binding and page count
    """
    aesthetic_rule: str
    grid_system: str
    grid_size: str
    generated_at: datetime
    element_count: int
    is_spread: bool
    content_type: str
    generation_mode: str = "fixed"
    spine_width: float = 0.0

    def to_dict(self) -> dict:
        return {
            "aesthetic_rule": self.aesthetic_rule,
            "grid_system": self.grid_system,
            "grid_size": self.grid_size,
            "generated_at": self.generated_at.isoformat(),
            "element_count": self.element_count,
            "is_spread": self.is_spread,
            "content_type": self.content_type,
            "generation_mode": self.generation_mode,
            "spine_width": self.spine_width,
        }


@dataclass(frozen=True)
class GeneratedLayout:
    """
    A generated document layout (immutable).

    Element order is emission order and is not z-order; use
    sorted_by_layer() for drawing.

    Attributes:
        id: Layout id ("layout-{timestamp}")
        elements: Placed elements across all pages
        dimensions: Page (or spread) dimensions
        metadata: Generation metadata
        config: Configuration the layout was generated from
        warnings: Non-fatal issues raised during generation

    Example:
        >>> layout = generate_layout(LayoutConfig(page_count=2))
        >>> [e.page for e in layout.elements]
        [1, 1, 1, 1, 2, 2, 2, 2]
    """
    id: str
    elements: tuple[LayoutElement, ...]
    dimensions: PageDimensions
    metadata: LayoutMetadata
    config: LayoutConfig
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def element_count(self) -> int:
        return len(self.elements)

    @property
    def page_count(self) -> int:
        return self.config.page_count

    def elements_on_page(self, page: int) -> list[LayoutElement]:
        """Elements on a page, in emission order."""
        return [e for e in self.elements if e.page == page]

    def sorted_by_layer(self, page: Optional[int] = None) -> list[LayoutElement]:
        """Elements in drawing order (lowest layer first), optionally for one page."""
        items = self.elements if page is None else self.elements_on_page(page)
        return sorted(items, key=lambda e: e.layer)

    def get_element(self, element_id: str) -> Optional[LayoutElement]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def with_elements(self, elements: Iterable[LayoutElement]) -> GeneratedLayout:
        """Copy with a new element list; id and config are kept."""
        elements = tuple(elements)
        metadata = replace(self.metadata, element_count=len(elements))
        return replace(self, elements=elements, metadata=metadata)
