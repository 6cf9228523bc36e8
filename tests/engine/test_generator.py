"""
Unit Tests for the Layout Generator

Tests for generate_layout() in FIXED, COUNTS and PATTERNS modes.
"""

import logging

import pytest

from gridgenie_toolkit.core.models import (
    ElementType,
    GridRect,
    ImageElement,
    LayoutConfig,
    TextElement,
    TextRole,
)
from gridgenie_toolkit.engine.generation import GenerationMode, generate_layout
from gridgenie_toolkit.engine.generation.generator import distribute
from gridgenie_toolkit.engine.generation.patterns import SPREAD_PATTERNS


def assert_no_overlaps(layout, columns: int, rows: int) -> None:
    for page in range(1, layout.page_count + 1):
        rects = [e.grid for e in layout.elements_on_page(page)]
        for i, rect in enumerate(rects):
            assert rect.x >= 0 and rect.y >= 0
            assert rect.bottom <= rows
            for other in rects[i + 1:]:
                assert not rect.overlaps(other), f"page {page}: {rect} overlaps {other}"


class TestFixedMode:
    """Tests for the fixed four-element template."""

    def test_generate_when_two_pages_then_four_elements_per_page(self, factory):
        """The fixed template should give four elements per page."""
        layout = generate_layout(LayoutConfig(page_count=2), factory=factory)
        assert len(layout.elements) == 8
        assert [e.page for e in layout.elements] == [1, 1, 1, 1, 2, 2, 2, 2]

    def test_generate_when_fixed_then_template_footprints(self, factory):
        """Fixed mode should reproduce the template footprints and roles."""
        layout = generate_layout(LayoutConfig(page_count=1), factory=factory)
        assert [e.grid for e in layout.elements] == [
            GridRect(0, 0, 4, 1),
            GridRect(0, 2, 3, 3),
            GridRect(4, 1, 2, 2),
            GridRect(4, 3, 2, 1),
        ]
        roles = [e.role if isinstance(e, TextElement) else None for e in layout.elements]
        assert roles == [TextRole.HEADING, TextRole.BODY, None, TextRole.CAPTION]
        assert isinstance(layout.elements[2], ImageElement)

    def test_generate_when_fixed_then_counts_ignored(self, factory):
        """Fixed mode should ignore the requested counts."""
        config = LayoutConfig(page_count=1, text_count=0, image_count=10)
        assert len(generate_layout(config, factory=factory).elements) == 4

    def test_generate_when_sequential_ids_then_elements_then_layout(self, factory):
        """Element ids should be drawn before the layout id."""
        layout = generate_layout(LayoutConfig(page_count=1), factory=factory)
        assert [e.id for e in layout.elements] == ["text-1", "text-2", "image-3", "text-4"]
        assert layout.id == "layout-5"

    def test_generate_when_ids_random_then_all_unique(self):
        """Default ids should be unique across the layout."""
        layout = generate_layout(LayoutConfig(page_count=5))
        ids = [e.id for e in layout.elements]
        assert len(ids) == len(set(ids))

    def test_generate_when_mode_given_as_string_then_accepted(self, factory):
        """Mode names should be accepted as strings."""
        layout = generate_layout(LayoutConfig(page_count=1), mode="fixed", factory=factory)
        assert layout.metadata.generation_mode == "fixed"

    def test_generate_when_unknown_mode_then_raises_error(self, factory):
        """Unknown modes should raise ValueError."""
        with pytest.raises(ValueError):
            generate_layout(LayoutConfig(), mode="random", factory=factory)


class TestMetadata:
    """Tests for layout metadata and dimensions."""

    def test_generate_when_single_pages_then_page_dimensions(self, factory):
        """Single-page layouts should report page dimensions and grid size."""
        layout = generate_layout(LayoutConfig(page_count=2), factory=factory)
        assert (layout.dimensions.width, layout.dimensions.height) == (210, 297)
        assert layout.metadata.grid_size == "6x8"
        assert layout.metadata.element_count == 8
        assert layout.metadata.is_spread is False
        assert layout.metadata.aesthetic_rule == "golden-ratio"
        assert layout.metadata.spine_width == 3.0

    def test_generate_when_spread_then_double_width_with_gutter(self, factory):
        """Spreads should report two pages plus the binding gutter."""
        config = LayoutConfig(page_count=2, spread_view=True, binding_gutter=6)
        layout = generate_layout(config, factory=factory)
        assert layout.dimensions.width == 426
        assert layout.metadata.grid_size == "12x8"
        assert layout.metadata.is_spread is True

    def test_generate_when_size_mode_then_grid_size_from_derived_counts(self, factory):
        """Size mode should report the derived grid size."""
        config = LayoutConfig(page_count=1, grid_size_mode="size", grid_cell_width=25, grid_cell_height=20)
        assert generate_layout(config, factory=factory).metadata.grid_size == "6x10"


class TestAesthetics:
    """Tests for apply_aesthetics=True."""

    def test_generate_when_golden_ratio_then_high_priority_moved(self, factory):
        """Only high-priority elements should move under golden ratio."""
        config = LayoutConfig(page_count=1, aesthetic_rule="golden-ratio")
        layout = generate_layout(config, factory=factory, apply_aesthetics=True)
        title, body, image, caption = layout.elements
        assert title.grid == GridRect(2, 4, 4, 1)
        assert image.grid == GridRect(3, 4, 2, 2)
        assert body.grid == GridRect(0, 2, 3, 3)
        assert caption.grid == GridRect(4, 3, 2, 1)

    def test_generate_when_unknown_rule_then_template_kept(self, factory):
        """An unknown rule should keep the template positions."""
        config = LayoutConfig(page_count=1, aesthetic_rule="symmetry")
        layout = generate_layout(config, factory=factory, apply_aesthetics=True)
        assert layout.elements[0].grid == GridRect(0, 0, 4, 1)


class TestCountsMode:
    """Tests for COUNTS mode."""

    def test_distribute_when_uneven_then_earlier_pages_take_remainder(self):
        """Earlier pages should take the remainder."""
        assert distribute(7, 3) == [3, 2, 2]
        assert distribute(2, 4) == [1, 1, 0, 0]
        assert distribute(0, 2) == [0, 0]

    def test_generate_when_counts_then_requested_mix_emitted(self, factory):
        """Counts mode should emit the requested text/image mix."""
        config = LayoutConfig(page_count=2, text_count=4, image_count=3)
        layout = generate_layout(config, mode=GenerationMode.COUNTS, factory=factory)
        texts = [e for e in layout.elements if e.type is ElementType.TEXT]
        images = [e for e in layout.elements if e.type is ElementType.IMAGE]
        assert (len(texts), len(images)) == (4, 3)
        assert layout.warnings == ()

    def test_generate_when_counts_then_heading_first_on_each_page(self, factory):
        """Each page should start with a heading."""
        config = LayoutConfig(page_count=2, text_count=4, image_count=2)
        layout = generate_layout(config, mode="counts", factory=factory)
        for page in (1, 2):
            first = layout.elements_on_page(page)[0]
            assert isinstance(first, TextElement)
            assert first.role is TextRole.HEADING

    def test_generate_when_counts_then_no_overlaps(self, factory):
        """Counts mode should never overlap elements."""
        config = LayoutConfig(page_count=3, text_count=9, image_count=7)
        layout = generate_layout(config, mode="counts", factory=factory)
        assert_no_overlaps(layout, 6, 8)

    def test_generate_when_page_overfull_then_skips_with_warnings(self, factory):
        """Elements that do not fit should be skipped with warnings."""
        config = LayoutConfig(page_count=1, columns=2, rows=2, text_count=6, image_count=0)
        layout = generate_layout(config, mode="counts", factory=factory)
        assert len(layout.elements) == 3
        assert len(layout.warnings) == 3
        assert all("skipped" in w for w in layout.warnings)
        assert_no_overlaps(layout, 2, 2)


class TestPatternsMode:
    """Tests for PATTERNS mode."""

    def test_generate_when_first_page_then_title_focus_pattern(self, factory):
        """The first page should use the first single-page pattern."""
        layout = generate_layout(LayoutConfig(page_count=1), mode="patterns", factory=factory)
        rects = {e.grid for e in layout.elements}
        assert rects == {
            GridRect(0, 0, 6, 2),
            GridRect(0, 2, 4, 4),
            GridRect(4, 2, 2, 4),
            GridRect(0, 6, 4, 2),
        }

    def test_generate_when_patterns_then_placed_by_priority(self, factory):
        """Pattern slots should be placed in priority order."""
        layout = generate_layout(LayoutConfig(page_count=1), mode="patterns", factory=factory)
        priorities = [e.priority for e in layout.elements]
        assert priorities == sorted(priorities, reverse=True)

    def test_generate_when_many_pages_then_no_overlaps(self, factory):
        """Rotating patterns should never overlap elements."""
        layout = generate_layout(LayoutConfig(page_count=6), mode="patterns", factory=factory)
        assert {e.page for e in layout.elements} == set(range(1, 7))
        assert_no_overlaps(layout, 6, 8)

    def test_generate_when_spread_then_right_page_elements_rebased(self, factory):
        """Right-of-binding elements should move to the right page."""
        config = LayoutConfig(page_count=2, spread_view=True)
        layout = generate_layout(config, mode="patterns", factory=factory)
        left = layout.elements_on_page(1)
        right = layout.elements_on_page(2)
        assert left and right
        assert all(e.grid.x < 6 for e in right)
        # Body and caption sit right of the binding
        assert {e.role for e in right if isinstance(e, TextElement)} == {TextRole.BODY, TextRole.CAPTION}

    def test_generate_when_spread_and_odd_pages_then_last_page_single(self, factory):
        """A trailing odd page should use a single-page pattern."""
        config = LayoutConfig(page_count=3, spread_view=True)
        layout = generate_layout(config, mode="patterns", factory=factory)
        assert {e.page for e in layout.elements} == {1, 2, 3}
        assert all(e.grid.right <= 6 for e in layout.elements_on_page(3))

    def test_generate_when_twelve_spread_pages_then_every_spread_pattern_used(self, factory, caplog):
        """Six spreads cycle through all six spread patterns in order."""
        config = LayoutConfig(page_count=12, spread_view=True)
        with caplog.at_level(logging.DEBUG, logger="gridgenie_toolkit.engine.generation.generator"):
            generate_layout(config, mode="patterns", factory=factory)
        used = [m.split("pattern ")[1].strip("'") for m in caplog.messages if m.startswith("Spread ")]
        assert used == [pattern.name for pattern in SPREAD_PATTERNS]
