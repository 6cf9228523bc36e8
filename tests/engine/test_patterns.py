"""
Unit Tests for Layout Patterns
"""

import pytest

from gridgenie_toolkit.core.models import ElementType, SpreadPosition, TextRole
from gridgenie_toolkit.engine.generation.patterns import (
    CONTENT_PRIORITIES,
    SINGLE_PAGE_PATTERNS,
    SPREAD_PATTERNS,
    PatternSlot,
    scale_slot,
    slot_kind,
)


class TestPatternSlot:
    """Tests for PatternSlot."""

    def test_init_when_unknown_kind_then_raises_error(self):
        """Unknown slot kinds should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown slot kind"):
            PatternSlot("video", 1, 1, 0, 0)

    def test_priority_when_kind_given_then_content_priority(self):
        """Slot priority should come from the content kind."""
        assert PatternSlot("title", 1, 1, 0, 0).priority == 10
        assert PatternSlot("caption", 1, 1, 0, 0).priority == 4

    def test_slot_kind_when_image_then_no_role(self):
        """Image slots should have no text role."""
        assert slot_kind("image") == (ElementType.IMAGE, None)
        assert slot_kind("title") == (ElementType.TEXT, TextRole.HEADING)


class TestScaleSlot:
    """Tests for scale_slot()."""

    def test_scale_when_six_by_eight_then_doubled(self):
        """A 6x8 grid should double reference coordinates."""
        scaled = scale_slot(PatternSlot("body", 1, 2, 2, 1), 6, 8)
        assert (scaled.grid_width, scaled.grid_height) == (2, 4)
        assert (scaled.preferred_x, scaled.preferred_y) == (4, 2)

    def test_scale_when_grid_smaller_than_reference_then_spans_at_least_one(self):
        """Scaled spans should never drop below one cell."""
        scaled = scale_slot(PatternSlot("caption", 1, 1, 2, 3), 1, 1)
        assert (scaled.grid_width, scaled.grid_height) == (1, 1)
        assert (scaled.preferred_x, scaled.preferred_y) == (0, 0)

    def test_scale_when_spread_slot_then_position_kept(self):
        """Scaling should keep a slot's spread position."""
        slot = PatternSlot("body", 2, 2, 4, 1, SpreadPosition.RIGHT)
        assert scale_slot(slot, 6, 8).spread_position is SpreadPosition.RIGHT


class TestPatternTables:
    """Sanity checks over the pattern tables."""

    def test_tables_when_loaded_then_six_each(self):
        """There should be six single-page and six spread patterns."""
        assert len(SINGLE_PAGE_PATTERNS) == 6
        assert len(SPREAD_PATTERNS) == 6

    def test_tables_when_loaded_then_names_unique(self):
        """Pattern names should be unique."""
        names = [p.name for p in SINGLE_PAGE_PATTERNS + SPREAD_PATTERNS]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("pattern", SINGLE_PAGE_PATTERNS, ids=lambda p: p.name)
    def test_single_page_pattern_when_loaded_then_fits_reference_grid(self, pattern):
        """Single-page slots should fit the 3x4 reference grid."""
        for slot in pattern.slots:
            assert slot.preferred_x + slot.grid_width <= 3
            assert slot.preferred_y + slot.grid_height <= 4
            assert slot.spread_position is None

    @pytest.mark.parametrize("pattern", SPREAD_PATTERNS, ids=lambda p: p.name)
    def test_spread_pattern_when_loaded_then_fits_reference_spread(self, pattern):
        """Spread slots should fit the 6x4 reference spread."""
        for slot in pattern.slots:
            assert slot.preferred_x + slot.grid_width <= 6
            assert slot.preferred_y + slot.grid_height <= 4
            assert slot.spread_position is not None

    def test_priorities_when_loaded_then_title_highest(self):
        """Titles should outrank every other kind."""
        assert max(CONTENT_PRIORITIES, key=CONTENT_PRIORITIES.get) == "title"
