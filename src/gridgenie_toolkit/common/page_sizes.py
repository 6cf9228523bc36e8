"""
Module: common.page_sizes

Purpose:
    Lookup table of named page sizes (millimetres) and small unit helpers.
    Unknown ids resolve to the first table entry rather than failing.

Key Functions:
    - get_page_size(): Resolve a page-size id to a PageSizeOption
    - mm_to_inches(): Unit conversion
    - get_orientation(): Portrait/landscape/square classification
    - format_dimensions(): Human-readable size label

Used By:
    - core.models.config: Page width/height resolution
    - output.*: Document titles and labels
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4


@dataclass(frozen=True)
class PageSizeOption:
    """
    Named page size in millimetres.

    Attributes:
        id: Stable identifier used in configs (e.g. "A4", "trade-paperback")
        name: Display name
        width: Width in mm
        height: Height in mm
        category: "standard", "book" or "custom"
    """
    id: str
    name: str
    width: float
    height: float
    category: str


PAGE_SIZES: tuple[PageSizeOption, ...] = (
    # Standard sizes
    PageSizeOption("A4", "A4 Portrait", 210, 297, "standard"),
    PageSizeOption("A4-landscape", "A4 Landscape", 297, 210, "standard"),
    PageSizeOption("A3", "A3 Portrait", 297, 420, "standard"),
    PageSizeOption("A3-landscape", "A3 Landscape", 420, 297, "standard"),
    PageSizeOption("A5", "A5 Portrait", 148, 210, "standard"),
    PageSizeOption("A5-landscape", "A5 Landscape", 210, 148, "standard"),
    PageSizeOption("US-Letter", "US Letter Portrait", 216, 279, "standard"),
    PageSizeOption("US-Letter-landscape", "US Letter Landscape", 279, 216, "standard"),
    PageSizeOption("US-Legal", "US Legal Portrait", 216, 356, "standard"),
    PageSizeOption("US-Legal-landscape", "US Legal Landscape", 356, 216, "standard"),
    PageSizeOption("Tabloid", "Tabloid Portrait", 279, 432, "standard"),
    PageSizeOption("Tabloid-landscape", "Tabloid Landscape", 432, 279, "standard"),
    # Portrait book sizes
    PageSizeOption("mass-market", "Mass Market Paperback", 108, 175, "book"),
    PageSizeOption("trade-paperback", "Trade Paperback", 152, 229, "book"),
    PageSizeOption("digest", "Digest", 140, 216, "book"),
    PageSizeOption("royal-octavo", "Royal Octavo", 156, 234, "book"),
    PageSizeOption("crown-quarto", "Crown Quarto", 189, 246, "book"),
    PageSizeOption("demy-octavo", "Demy Octavo", 138, 216, "book"),
    PageSizeOption("royal-quarto", "Royal Quarto", 234, 312, "book"),
    PageSizeOption("comic-book", "Comic Book", 170, 260, "book"),
    PageSizeOption("manga", "Manga", 128, 182, "book"),
    PageSizeOption("novel-standard", "Novel Standard", 140, 210, "book"),
    PageSizeOption("textbook", "Textbook", 203, 254, "book"),
    # Landscape book sizes
    PageSizeOption("landscape-large", "Landscape Large", 279, 216, "book"),
    PageSizeOption("landscape-standard", "Landscape Standard", 254, 203, "book"),
    PageSizeOption("landscape-small", "Landscape Small", 229, 152, "book"),
    PageSizeOption("coffee-table", "Coffee Table Book", 305, 254, "book"),
    PageSizeOption("art-book-landscape", "Art Book Landscape", 305, 229, "book"),
    PageSizeOption("photo-book", "Photo Book", 280, 210, "book"),
    PageSizeOption("calendar", "Calendar", 297, 210, "book"),
    PageSizeOption("cookbook", "Cookbook", 254, 203, "book"),
    PageSizeOption("children-landscape", "Children's Book Landscape", 254, 203, "book"),
    # Square book sizes
    PageSizeOption("square-large", "Square Large", 254, 254, "book"),
    PageSizeOption("square-medium", "Square Medium", 203, 203, "book"),
    PageSizeOption("square-small", "Square Small", 178, 178, "book"),
    PageSizeOption("instagram-book", "Instagram Book", 210, 210, "book"),
    # Portrait art and specialty books
    PageSizeOption("art-book", "Art Book Portrait", 229, 305, "book"),
    PageSizeOption("exhibition-catalog", "Exhibition Catalog", 210, 280, "book"),
    PageSizeOption("poetry-book", "Poetry Book", 127, 203, "book"),
    PageSizeOption("journal", "Journal/Notebook", 148, 210, "book"),
    # Custom (dimensions come from the config)
    PageSizeOption("custom", "Custom Size", 210, 297, "custom"),
)

_BY_ID = {size.id: size for size in PAGE_SIZES}


def get_page_size(size_id: str) -> PageSizeOption:
    """
    Resolve a page-size id.

    Args:
        size_id: Identifier such as "A4" or "trade-paperback"

    Returns:
        Matching PageSizeOption, or the first entry (A4) if unknown.

    Example:
        >>> get_page_size("A5").width
        148
        >>> get_page_size("nonsense").id
        'A4'
    """
    size = _BY_ID.get(size_id)
    if size is None:
        logger.warning(f"Unknown page size {size_id!r}, falling back to {PAGE_SIZES[0].id}")
        return PAGE_SIZES[0]
    return size


def mm_to_inches(mm: float) -> float:
    return mm / MM_PER_INCH


def get_orientation(width: float, height: float) -> Literal["portrait", "landscape", "square"]:
    """Classify page proportions."""
    if width == height:
        return "square"
    return "landscape" if width > height else "portrait"


def format_dimensions(width: float, height: float) -> str:
    """Format as '210x297mm (8.3x11.7")'."""
    return (
        f"{width:g}x{height:g}mm "
        f"({mm_to_inches(width):.1f}x{mm_to_inches(height):.1f}\")"
    )
