"""
Engine Package

Automatic placement engine and the editing session built on it.

Pipeline: LayoutConfig -> generate_layout -> (ElementFactory x N) ->
GeneratedLayout. Interactive additions go find_next_available_position ->
ElementFactory -> LayoutSession.
"""

from .grid import GridGeometry, GridOccupancy
from .placement import (
    AestheticRule,
    ElementFactory,
    IdProvider,
    SequentialIdProvider,
    TimestampIdProvider,
    apply_aesthetic_rule,
    create_image_element,
    create_text_element,
    find_next_available_position,
)
from .generation import GenerationMode, generate_layout
from .session import (
    CapacityError,
    ElementLockedError,
    ElementNotFoundError,
    InvalidUpdateError,
    LayoutSession,
    SessionError,
)

__all__ = [
    # grid
    "GridGeometry",
    "GridOccupancy",
    # placement
    "AestheticRule",
    "ElementFactory",
    "IdProvider",
    "SequentialIdProvider",
    "TimestampIdProvider",
    "apply_aesthetic_rule",
    "create_image_element",
    "create_text_element",
    "find_next_available_position",
    # generation
    "GenerationMode",
    "generate_layout",
    # session
    "LayoutSession",
    "SessionError",
    "ElementNotFoundError",
    "ElementLockedError",
    "CapacityError",
    "InvalidUpdateError",
]
