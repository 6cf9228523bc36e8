"""
Unit Tests for Core Models

Tests for LayoutConfig, grid value types, elements and GeneratedLayout.
"""

import pytest
from datetime import datetime

from gridgenie_toolkit.core.models import (
    ElementType,
    GeneratedLayout,
    GridRect,
    GridSizeMode,
    ImageElement,
    LayoutConfig,
    LayoutMetadata,
    PageDimensions,
    TextAlign,
    TextElement,
    TextRole,
    element_from_dict,
)


def make_layout(elements, config=None) -> GeneratedLayout:
    config = config or LayoutConfig(page_count=2)
    metadata = LayoutMetadata(
        aesthetic_rule="golden-ratio",
        grid_system="modular",
        grid_size="6x8",
        generated_at=datetime(2024, 1, 1, 12, 0, 0),
        element_count=len(elements),
        is_spread=False,
        content_type="custom",
    )
    return GeneratedLayout(
        id="layout-1",
        elements=tuple(elements),
        dimensions=PageDimensions(210, 297),
        metadata=metadata,
        config=config,
    )


class TestLayoutConfig:
    """Tests for LayoutConfig."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_defaults_then_a4_six_by_eight(self):
        """Defaults describe an A4 page with a 6x8 grid."""
        config = LayoutConfig()
        assert config.page_width == 210
        assert config.page_height == 297
        assert config.columns == 6
        assert config.rows == 8
        assert config.grid_size_mode is GridSizeMode.COUNT

    def test_init_when_zero_columns_then_raises_error(self):
        """columns < 1 should raise ValueError."""
        with pytest.raises(ValueError, match="columns must be >= 1"):
            LayoutConfig(columns=0)

    def test_init_when_zero_rows_then_raises_error(self):
        """rows < 1 should raise ValueError."""
        with pytest.raises(ValueError, match="rows must be >= 1"):
            LayoutConfig(rows=0)

    def test_init_when_negative_spacing_then_raises_error(self):
        """Negative grid spacing should raise ValueError."""
        with pytest.raises(ValueError, match="grid spacing must be non-negative"):
            LayoutConfig(grid_spacing_x=-1)

    def test_init_when_zero_pages_then_raises_error(self):
        """page_count < 1 should raise ValueError."""
        with pytest.raises(ValueError, match="page_count must be >= 1"):
            LayoutConfig(page_count=0)

    def test_init_when_negative_margin_then_raises_error(self):
        """Negative margins should raise ValueError."""
        with pytest.raises(ValueError, match="margin_top must be non-negative"):
            LayoutConfig(margin_top=-5)

    def test_init_when_mode_given_as_string_then_converted(self):
        """A grid size mode string should become the enum."""
        config = LayoutConfig(grid_size_mode="size")
        assert config.grid_size_mode is GridSizeMode.SIZE

    # ─────────────────────────────────────────────────────────────────────────
    # Page Geometry Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_page_width_when_custom_size_then_uses_custom_dimensions(self):
        """Custom sizes should use custom_width/height."""
        config = LayoutConfig(page_size="custom", custom_width=100, custom_height=50)
        assert (config.page_width, config.page_height) == (100, 50)

    def test_page_width_when_landscape_then_swaps_dimensions(self):
        """Landscape should swap width and height."""
        config = LayoutConfig(orientation="landscape")
        assert (config.page_width, config.page_height) == (297, 210)

    def test_page_width_when_unknown_size_then_falls_back_to_a4(self):
        """Unknown page sizes should fall back to A4."""
        config = LayoutConfig(page_size="nonsense")
        assert (config.page_width, config.page_height) == (210, 297)

    def test_content_width_when_defaults_then_excludes_margins(self):
        """Content size should exclude the margins."""
        config = LayoutConfig()
        assert config.content_width == 180
        assert config.content_height == 257

    def test_left_margin_for_when_single_page_then_uses_margin_left(self):
        """Single pages should use margin_left."""
        config = LayoutConfig(margin_left=12)
        assert config.left_margin_for(1) == 12
        assert config.left_margin_for(2) == 12

    def test_left_margin_for_when_spread_then_alternates_outer_and_inner(self):
        """Spread pages should alternate outer and inner margins."""
        config = LayoutConfig(spread_view=True, margin_outer=10, margin_inner=30)
        assert config.left_margin_for(1) == 10
        assert config.left_margin_for(2) == 30
        assert config.right_margin_for(1) == 30
        assert config.right_margin_for(2) == 10

    def test_requested_elements_when_counts_set_then_returns_sum(self):
        """Requested elements should be text plus image count."""
        assert LayoutConfig(image_count=2, text_count=5).requested_elements == 7


class TestGridRect:
    """Tests for GridRect."""

    def test_cells_when_two_by_one_then_yields_row_major(self):
        """cells should yield coordinates row-major."""
        assert list(GridRect(1, 2, 2, 1).cells()) == [(1, 2), (2, 2)]

    def test_overlaps_when_sharing_cell_then_true(self):
        """Rects sharing a cell should overlap."""
        assert GridRect(0, 0, 2, 2).overlaps(GridRect(1, 1, 2, 2))

    def test_overlaps_when_only_touching_then_false(self):
        """Edge-touching rects should not overlap."""
        assert not GridRect(0, 0, 2, 2).overlaps(GridRect(2, 0, 2, 2))
        assert not GridRect(0, 0, 2, 2).overlaps(GridRect(0, 2, 2, 2))

    def test_from_dict_when_round_tripped_then_equal(self):
        """GridRect should survive a dict round trip."""
        rect = GridRect(3, 4, 2, 1)
        assert GridRect.from_dict(rect.to_dict()) == rect


class TestTextRole:
    """Tests for TextRole.parse()."""

    @pytest.mark.parametrize("name,expected", [
        ("heading", TextRole.HEADING),
        ("headline", TextRole.HEADING),
        ("title", TextRole.HEADING),
        ("Subtitle", TextRole.SUBHEADING),
        ("caption", TextRole.CAPTION),
        ("body", TextRole.BODY),
    ])
    def test_parse_when_known_name_then_returns_role(self, name, expected):
        """Role names and aliases should parse to roles."""
        assert TextRole.parse(name) is expected

    def test_parse_when_unknown_name_then_body(self):
        """Unknown role names should fall back to body."""
        assert TextRole.parse("footnote") is TextRole.BODY


class TestElements:
    """Tests for TextElement / ImageElement."""

    def test_init_when_zero_width_then_raises_error(self):
        """Zero width should raise ValueError."""
        with pytest.raises(ValueError, match="width must be > 0"):
            ImageElement(id="image-1", x=0, y=0, width=0, height=10, page=1)

    def test_init_when_negative_x_then_raises_error(self):
        """Negative x should raise ValueError."""
        with pytest.raises(ValueError, match="x must be >= 0"):
            ImageElement(id="image-1", x=-1, y=0, width=10, height=10, page=1)

    def test_init_when_page_zero_then_raises_error(self):
        """page < 1 should raise ValueError."""
        with pytest.raises(ValueError, match="page must be >= 1"):
            TextElement(id="text-1", x=0, y=0, width=10, height=10, page=0)

    def test_init_when_opacity_out_of_range_then_raises_error(self):
        """Opacity outside 0..1 should raise ValueError."""
        with pytest.raises(ValueError, match="opacity"):
            TextElement(id="text-1", x=0, y=0, width=10, height=10, page=1, opacity=1.5)

    def test_type_when_text_element_then_text(self):
        """TextElement should report the text type."""
        element = TextElement(id="text-1", x=0, y=0, width=10, height=10, page=1)
        assert element.type is ElementType.TEXT
        assert element.is_text

    def test_to_dict_when_text_then_tagged_and_enum_values_plain(self):
        """to_dict should tag the type and store enum values."""
        element = TextElement(
            id="text-1", x=15, y=20, width=155, height=37.125, page=1,
            role=TextRole.HEADING, text_align=TextAlign.CENTER, grid=GridRect(0, 0, 4, 1),
        )
        data = element.to_dict()
        assert data["type"] == "text"
        assert data["role"] == "heading"
        assert data["text_align"] == "center"
        assert data["grid"] == {"x": 0, "y": 0, "width": 4, "height": 1}

    def test_element_from_dict_when_round_tripped_then_equal(self):
        """Elements should survive a dict round trip."""
        element = TextElement(
            id="text-1", x=15, y=20, width=155, height=37.125, page=1,
            role=TextRole.CAPTION, grid=GridRect(0, 0, 4, 1),
        )
        assert element_from_dict(element.to_dict()) == element

    def test_element_from_dict_when_unknown_type_then_raises_error(self):
        """Unknown element types should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown element type"):
            element_from_dict({"type": "video", "id": "v", "x": 0, "y": 0,
                               "width": 1, "height": 1, "page": 1})

    def test_element_from_dict_when_extra_keys_then_ignored(self):
        """Extra keys should be ignored."""
        data = ImageElement(id="image-1", x=0, y=0, width=10, height=10, page=1).to_dict()
        data["future_field"] = 1
        assert element_from_dict(data).id == "image-1"


class TestGeneratedLayout:
    """Tests for GeneratedLayout queries."""

    def test_sorted_by_layer_when_mixed_layers_then_lowest_first(self):
        """Elements should sort by layer, lowest first."""
        a = ImageElement(id="a", x=0, y=0, width=10, height=10, page=1, layer=2)
        b = ImageElement(id="b", x=0, y=0, width=10, height=10, page=1, layer=0)
        c = ImageElement(id="c", x=0, y=0, width=10, height=10, page=2, layer=1)
        layout = make_layout([a, b, c])
        assert [e.id for e in layout.sorted_by_layer(1)] == ["b", "a"]
        assert [e.id for e in layout.sorted_by_layer()] == ["b", "c", "a"]

    def test_with_elements_when_element_removed_then_count_updated(self):
        """with_elements should update the element count."""
        a = ImageElement(id="a", x=0, y=0, width=10, height=10, page=1)
        b = ImageElement(id="b", x=0, y=0, width=10, height=10, page=1)
        layout = make_layout([a, b]).with_elements([a])
        assert layout.element_count == 1
        assert layout.metadata.element_count == 1
        assert layout.id == "layout-1"

    def test_get_element_when_unknown_id_then_none(self):
        """Unknown ids should return None."""
        assert make_layout([]).get_element("missing") is None
