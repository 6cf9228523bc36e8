"""
Module: core.models.elements

Purpose:
    Placed layout elements. A tagged union: a shared geometry/state base
    (LayoutElement) with type-specific payloads (TextElement, ImageElement),
    so each type only carries the attributes that are valid for it.

Key Classes:
    - LayoutElement: Shared geometry, page and editing state
    - TextElement: Typography and placeholder text
    - ImageElement: Placeholder image reference

Key Functions:
    - element_from_dict(): Deserialize either element type

Invariants:
    - width > 0 and height > 0
    - x >= 0 and y >= 0
    - page >= 1
    - 0 <= opacity <= 1

Used By:
    - engine.placement.factory: Creates elements
    - engine.session: Replaces elements on edit
    - output.*: Renders elements
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Optional

from .kinds import ElementType, TextAlign, TextRole
from .plans import GridRect


@dataclass(frozen=True)
class LayoutElement:
    """
    Base element: absolute geometry (mm) plus editing state.

    Attributes:
        id: Unique element id
        x / y: Top-left position in mm from the page's top-left corner
        width / height: Size in mm
        page: 1-based page number
        content: Placeholder text or image URL
        rotation: Visual rotation in degrees (ignored by placement)
        locked: Editing disabled for geometry
        hidden: Excluded from rendering
        layer: Z-order; higher draws on top
        priority: Visual dominance 1-10
        layer_name: Optional display name in the layer list
        opacity: 0-1
        grid: Cell footprint recorded at creation, None once the element
            has been moved off-grid
    """

    element_type: ClassVar[ElementType]

    id: str
    x: float
    y: float
    width: float
    height: float
    page: int
    content: str = ""
    rotation: float = 0.0
    locked: bool = False
    hidden: bool = False
    layer: int = 0
    priority: int = 5
    layer_name: Optional[str] = None
    opacity: float = 1.0
    grid: Optional[GridRect] = None

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be > 0: {self.height}")
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.y < 0:
            raise ValueError(f"y must be >= 0: {self.y}")
        if self.page < 1:
            raise ValueError(f"page must be >= 1: {self.page}")
        if not 0 <= self.opacity <= 1:
            raise ValueError(f"opacity must be within [0, 1]: {self.opacity}")

    @property
    def type(self) -> ElementType:
        return self.element_type

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_text(self) -> bool:
        return self.element_type is ElementType.TEXT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with a "type" tag."""
        data: dict[str, Any] = {"type": self.element_type.value}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "grid":
                value = value.to_dict() if value is not None else None
            elif hasattr(value, "value"):
                value = value.value
            data[f.name] = value
        return data


@dataclass(frozen=True)
class TextElement(LayoutElement):
    """
    Text placeholder.

    Attributes:
        role: Heading, subheading, body or caption
        font_size: Size in points
        font_family: Font name
        font_weight: "normal", "bold" or numeric weight string
        color: Hex colour
        text_align: Horizontal alignment
        leading: Line-height multiplier
        letter_spacing / word_spacing: Tracking adjustments
        text_transform: "none", "uppercase", "lowercase", "capitalize"
    """

    element_type: ClassVar[ElementType] = ElementType.TEXT

    role: TextRole = TextRole.BODY
    font_size: float = 11.0
    font_family: str = "Inter"
    font_weight: str = "normal"
    color: str = "#000000"
    text_align: TextAlign = TextAlign.LEFT
    leading: float = 1.4
    letter_spacing: float = 0.0
    word_spacing: float = 100.0
    text_transform: str = "none"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.font_size <= 0:
            raise ValueError(f"font_size must be > 0: {self.font_size}")


@dataclass(frozen=True)
class ImageElement(LayoutElement):
    """
    Image placeholder; content holds the image URL.

    Attributes:
        background_color: Fill shown while the image is a placeholder
    """

    element_type: ClassVar[ElementType] = ElementType.IMAGE

    background_color: str = "#e6f3ff"


_ENUM_FIELDS = {
    "role": TextRole.parse,
    "text_align": TextAlign,
}


def element_from_dict(data: dict[str, Any]) -> LayoutElement:
    """
    Deserialize an element, dispatching on its "type" tag.

    Unknown keys are ignored so documents from newer versions still load.

    Raises:
        ValueError: If the type tag is missing/unknown or geometry is invalid
    """
    try:
        element_type = ElementType(data.get("type"))
    except ValueError as e:
        raise ValueError(f"Unknown element type: {data.get('type')!r}") from e

    cls: type[LayoutElement] = TextElement if element_type is ElementType.TEXT else ImageElement
    names = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in names:
            continue
        if key == "grid":
            value = GridRect.from_dict(value) if value is not None else None
        elif key in _ENUM_FIELDS and value is not None:
            value = _ENUM_FIELDS[key](value)
        kwargs[key] = value
    return cls(**kwargs)
