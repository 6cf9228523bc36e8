"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .page_sizes import (
    PAGE_SIZES,
    PageSizeOption,
    get_page_size,
    get_orientation,
    format_dimensions,
    mm_to_inches,
)
from .bindings import BindingSpec, get_binding_spec, spine_width

__all__ = [
    # page sizes
    "PAGE_SIZES",
    "PageSizeOption",
    "get_page_size",
    "get_orientation",
    "format_dimensions",
    "mm_to_inches",
    # bindings
    "BindingSpec",
    "get_binding_spec",
    "spine_width",
]
