"""
Placement Package

Turns grid footprints into elements and finds room for new ones.

- ids: Injectable id providers
- factory: Grid footprint -> LayoutElement
- finder: First free slot on a populated page
- aesthetics: Focal-point and Fibonacci post-processing of plans
"""

from .ids import IdProvider, SequentialIdProvider, TimestampIdProvider
from .factory import ElementFactory, create_image_element, create_text_element
from .finder import element_footprint, find_next_available_position, page_occupancy
from .aesthetics import AestheticRule, apply_aesthetic_rule, fibonacci

__all__ = [
    # ids
    "IdProvider",
    "SequentialIdProvider",
    "TimestampIdProvider",
    # factory
    "ElementFactory",
    "create_image_element",
    "create_text_element",
    # finder
    "element_footprint",
    "find_next_available_position",
    "page_occupancy",
    # aesthetics
    "AestheticRule",
    "apply_aesthetic_rule",
    "fibonacci",
]
