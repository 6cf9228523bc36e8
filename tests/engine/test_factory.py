"""
Unit Tests for ElementFactory

Tests for grid -> mm geometry, size floors and role typography.
"""

import pytest

from gridgenie_toolkit.core.models import (
    ElementType,
    GridRect,
    ImageElement,
    LayoutConfig,
    TextAlign,
    TextElement,
    TextRole,
)
from gridgenie_toolkit.engine.grid import GridGeometry
from gridgenie_toolkit.engine.placement import factory as factory_module
from gridgenie_toolkit.engine.placement.factory import (
    CAPTION_TEXT,
    HEADING_TEXT,
    SUBHEADING_TEXT,
)
from gridgenie_toolkit.engine.text.lorem import estimate_text_metrics


class TestGeometry:
    """Tests for absolute geometry of created elements."""

    def test_create_image_when_grid_given_then_absolute_geometry(self, factory, config):
        """Grid coordinates should project to mm geometry."""
        element = factory.create_image_element(config, 1, 4, 1, 2, 2)
        assert element.x == pytest.approx(175)
        assert element.y == pytest.approx(62.125)
        assert element.width == pytest.approx(75)
        assert element.height == pytest.approx(79.25)
        assert element.grid == GridRect(4, 1, 2, 2)

    def test_create_text_when_grid_given_then_records_footprint(self, factory, config):
        """Created elements should record their grid footprint."""
        element = factory.create_text_element(config, 1, 0, 2, 3, 3)
        assert element.x == pytest.approx(15)
        assert element.y == pytest.approx(104.25)
        assert element.width == pytest.approx(115)
        assert element.height == pytest.approx(121.375)
        assert element.grid == GridRect(0, 2, 3, 3)

    def test_create_when_geometry_back_projected_then_footprint_recovered(self, factory, config):
        """Back-projecting created geometry should recover the footprint."""
        geometry = GridGeometry.for_page(config)
        for gx, gy, gw, gh in [(0, 0, 4, 1), (4, 1, 2, 2), (4, 3, 2, 1), (0, 2, 3, 3)]:
            element = factory.create_image_element(config, 1, gx, gy, gw, gh)
            rect = geometry.to_grid(element.x, element.y, element.width, element.height)
            assert (rect.x, rect.y) == (gx, gy)
            assert rect.width >= gw
            assert rect.height >= gh

    def test_create_text_when_single_small_cell_then_minimum_size(self, factory):
        """Tiny cells should be raised to the minimum text size."""
        config = LayoutConfig(columns=12, rows=16)
        element = factory.create_text_element(config, 1, 0, 0, 1, 1)
        assert element.width == 50
        assert element.height == 30

    def test_create_image_when_single_cell_then_minimum_image_height(self, factory, config):
        """Images should get at least the minimum image height."""
        element = factory.create_image_element(config, 1, 0, 0, 1, 1)
        assert element.width == 50
        assert element.height == 50

    def test_create_when_non_positive_span_then_treated_as_one(self, factory, config):
        """Zero or negative spans should become one cell."""
        element = factory.create_image_element(config, 1, 0, 0, 0, -3)
        assert element.grid == GridRect(0, 0, 1, 1)
        assert element.width > 0 and element.height > 0

    def test_create_when_negative_origin_then_clamped_to_zero(self, factory, config):
        """Negative grid origins should clamp to zero."""
        element = factory.create_text_element(config, 1, -2, -1, 2, 1)
        assert element.grid.x == 0 and element.grid.y == 0
        assert element.x >= 0 and element.y >= 0

    def test_create_when_spread_even_page_then_inner_margin(self, factory):
        """Even spread pages should be offset by the inner margin."""
        config = LayoutConfig(spread_view=True, margin_inner=25, margin_outer=15)
        assert factory.create_image_element(config, 1, 0, 0, 2, 2).x == 15
        assert factory.create_image_element(config, 2, 0, 0, 2, 2).x == 25


class TestTextRoles:
    """Tests for role-dependent typography."""

    def test_create_text_when_heading_then_scaled_bold_static_copy(self, factory, config):
        """Headings should be bold, scaled and use static copy."""
        element = factory.create_text_element(config, 1, 0, 0, 4, 1, "heading")
        assert element.role is TextRole.HEADING
        assert element.font_size == pytest.approx(16.5)
        assert element.font_weight == "bold"
        assert element.content == HEADING_TEXT
        assert element.text_align is TextAlign.LEFT

    def test_create_text_when_legacy_headline_then_heading(self, factory, config):
        """The legacy "headline" role should map to heading."""
        element = factory.create_text_element(config, 1, 0, 0, 4, 1, "headline")
        assert element.role is TextRole.HEADING

    def test_create_text_when_subheading_then_semibold(self, factory, config):
        """Subheadings should be semibold."""
        element = factory.create_text_element(config, 1, 0, 0, 4, 1, TextRole.SUBHEADING)
        assert element.font_size == pytest.approx(13.2)
        assert element.font_weight == "600"
        assert element.content == SUBHEADING_TEXT

    def test_create_text_when_caption_then_smaller_font(self, factory, config):
        """Captions should use a smaller font than the base."""
        element = factory.create_text_element(config, 1, 4, 3, 2, 1, "caption")
        assert element.font_size == pytest.approx(8.8)
        assert element.content == CAPTION_TEXT

    def test_create_text_when_body_then_text_sized_to_box(self, factory, config):
        """Body text length should follow the box size."""
        element = factory.create_text_element(config, 1, 0, 2, 3, 3)
        metrics = estimate_text_metrics(element.width, element.height, 11, config.base_leading)
        assert element.role is TextRole.BODY
        assert element.font_size == 11
        assert element.leading == config.base_leading
        assert len(element.content.split()) == metrics.words

    def test_create_text_when_justification_enabled_then_body_justified(self, factory, config):
        """Body text should be justified when enabled."""
        assert factory.create_text_element(config, 1, 0, 2, 3, 3).text_align is TextAlign.JUSTIFY

    def test_create_text_when_justification_disabled_then_left(self, factory):
        """Body text should be left-aligned when justification is off."""
        config = LayoutConfig(enable_justification=False)
        assert factory.create_text_element(config, 1, 0, 2, 3, 3).text_align is TextAlign.LEFT

    def test_create_text_when_config_typography_then_copied(self, factory):
        """Font family and colour should come from the config."""
        config = LayoutConfig(primary_font="Georgia", text_color="#333333")
        element = factory.create_text_element(config, 1, 0, 0, 2, 1, "caption")
        assert element.font_family == "Georgia"
        assert element.color == "#333333"


class TestIdsAndContent:
    """Tests for ids, image URLs and dispatch."""

    def test_create_when_sequential_provider_then_ids_in_order(self, factory, config):
        """Ids should come from the injected provider in order."""
        first = factory.create_text_element(config, 1, 0, 0, 1, 1, "caption")
        second = factory.create_image_element(config, 1, 2, 0, 1, 1)
        assert (first.id, second.id) == ("text-1", "image-2")

    def test_create_image_when_created_then_placeholder_url(self, factory, config):
        """Images should get a placeholder URL sized to the box."""
        element = factory.create_image_element(config, 3, 4, 1, 2, 2)
        assert element.content == "/placeholder.svg?height=79&width=75&text=Image+3"

    def test_create_element_when_image_type_then_image(self, factory, config):
        """The image type should dispatch to create_image_element."""
        element = factory.create_element(ElementType.IMAGE, config, 1, GridRect(0, 0, 2, 2))
        assert isinstance(element, ImageElement)

    def test_create_element_when_text_with_role_then_text(self, factory, config):
        """Text types should carry their role through."""
        element = factory.create_element(
            ElementType.TEXT, config, 1, GridRect(0, 0, 2, 1), role=TextRole.CAPTION, priority=4,
        )
        assert isinstance(element, TextElement)
        assert element.role is TextRole.CAPTION
        assert element.priority == 4

    def test_module_shortcuts_when_called_then_use_default_factory(self, config):
        """Module-level shortcuts should work without a factory."""
        text = factory_module.create_text_element(config, 1, 0, 0, 2, 1, "heading")
        image = factory_module.create_image_element(config, 1, 2, 0, 2, 2)
        assert text.id.startswith("text-")
        assert image.id.startswith("image-")
        assert text.id != image.id
