"""
Tests for the JSON exporters.
"""

import json

import pytest

from gridgenie_toolkit.core.models import LayoutConfig
from gridgenie_toolkit.core.utils.serialization import load_layout_json
from gridgenie_toolkit.engine.generation import generate_layout
from gridgenie_toolkit.output import ExportError, layout_to_figma, write_figma_json, write_layout_json


@pytest.fixture
def layout(factory):
    return generate_layout(LayoutConfig(page_count=2), factory=factory)


class TestWriteLayoutJson:
    """Tests for write_layout_json()."""

    def test_write_when_called_then_loads_back_equal(self, layout, tmp_path):
        """Written JSON should load back as the same layout."""
        path = write_layout_json(layout, tmp_path / "layout.json")
        restored = load_layout_json(path)
        assert restored.id == layout.id
        assert restored.elements == layout.elements

    def test_write_when_parent_is_file_then_raises_export_error(self, layout, tmp_path):
        """Unwritable paths should raise ExportError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(ExportError, match="Failed to write layout JSON"):
            write_layout_json(layout, blocker / "layout.json")


class TestLayoutToFigma:
    """Tests for layout_to_figma()."""

    def test_convert_when_two_pages_then_frame_per_page(self, layout):
        """Each page should become a frame, side by side."""
        data = layout_to_figma(layout)
        assert data["type"] == "FRAME"
        assert data["width"] == 420
        assert [page["name"] for page in data["children"]] == ["Page 1", "Page 2"]
        assert data["children"][1]["x"] == 210

    def test_convert_when_elements_then_node_types(self, layout):
        """Text should map to TEXT and images to RECTANGLE."""
        nodes = layout_to_figma(layout)["children"][0]["children"]
        assert [n["type"] for n in nodes] == ["TEXT", "TEXT", "RECTANGLE", "TEXT"]

    def test_convert_when_text_then_characters_and_style(self, layout):
        """Text nodes should carry content, weight, alignment and colour."""
        heading = layout_to_figma(layout)["children"][0]["children"][0]
        assert heading["characters"] == "Headline Goes Here"
        assert heading["style"]["fontWeight"] == "bold"
        assert heading["style"]["textAlignHorizontal"] == "LEFT"
        assert heading["fills"][0]["color"] == {"r": 0.0, "g": 0.0, "b": 0.0}

    def test_convert_when_image_then_background_fill(self, layout):
        """Image nodes should fill with the background colour."""
        image = layout_to_figma(layout)["children"][0]["children"][2]
        assert image["fills"][0]["color"] == {"r": 0.902, "g": 0.953, "b": 1.0}

    def test_convert_when_metadata_then_config_and_rule(self, layout):
        """Metadata should carry the config and the rule."""
        meta = layout_to_figma(layout)["metadata"]["gridGenie"]
        assert meta["aestheticRule"] == "golden-ratio"
        assert meta["config"]["columns"] == 6

    def test_write_figma_when_called_then_valid_json_file(self, layout, tmp_path):
        """write_figma_json should create parents and write JSON."""
        path = write_figma_json(layout, tmp_path / "out" / "layout.figma.json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["children"][0]["type"] == "FRAME"
