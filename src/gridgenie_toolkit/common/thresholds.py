"""Centralized threshold and magic number configuration.

This module contains the hardcoded thresholds, ratios, and scale factors
used by element placement and rendering. Having these in one place makes
tuning easier.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementThresholds:
    """Minimum sizes and typography scales for created elements."""

    # Minimum visible sizes (mm-equivalent units)
    min_element_width: float = 50.0
    min_text_height: float = 30.0
    min_image_height: float = 50.0

    # Font scale per text role, relative to base_font_size
    heading_scale: float = 1.5
    subheading_scale: float = 1.2
    body_scale: float = 1.0
    caption_scale: float = 0.8

    # Leading per role (body uses config.base_leading)
    heading_leading: float = 1.1
    subheading_leading: float = 1.2
    caption_leading: float = 1.3

    # Body text sizing heuristics
    avg_char_width_ratio: float = 0.6  # Character width as a fraction of font size
    avg_word_length: float = 5.5
    min_chars_per_line: int = 10
    pt_per_mm: float = 72 / 25.4

    # Back-projection tolerance for float noise
    grid_epsilon: float = 1e-6


@dataclass(frozen=True)
class AestheticThresholds:
    """Ratios for the aesthetic post-processing rules."""

    golden_ratio: float = 0.618
    high_priority: int = 7  # Plans at or above this priority get repositioned


@dataclass(frozen=True)
class SessionThresholds:
    """Default footprints for interactively added elements (grid cells)."""

    text_span: tuple[int, int] = (3, 2)
    image_span: tuple[int, int] = (2, 2)
    default_priority: int = 5


# Global instances for easy import
PLACEMENT_THRESHOLDS = PlacementThresholds()
AESTHETIC_THRESHOLDS = AestheticThresholds()
SESSION_THRESHOLDS = SessionThresholds()
