"""
Module: output.json_writer

Purpose:
    JSON exports: the native layout document (schema-validated on load)
    and a Figma-style frame tree for import tools.

Key Functions:
    - write_layout_json(): Native layout document
    - layout_to_figma(): Figma-style dict (one frame per page)
    - write_figma_json(): Figma-style document on disk

Dependencies:
    - json (std)
    - core.utils.serialization: Native document format
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from PIL import ImageColor

from gridgenie_toolkit.core.models import GeneratedLayout, ImageElement, LayoutElement, TextElement
from gridgenie_toolkit.core.utils.serialization import save_layout_json, serialize_config

from .errors import ExportError

logger = logging.getLogger(__name__)

IMAGE_STROKE = {"r": 0.0, "g": 0.4, "b": 0.8}
TEXT_FILL = {"r": 0.94, "g": 1.0, "b": 0.94}
TEXT_STROKE = {"r": 0.0, "g": 0.8, "b": 0.0}


def write_layout_json(layout: GeneratedLayout, output_path: Path) -> Path:
    """
    Write the native layout document.

    Raises:
        ExportError: If the file cannot be written
    """
    try:
        save_layout_json(layout, output_path)
    except OSError as e:
        raise ExportError(f"Failed to write layout JSON: {e}", output_path) from e
    logger.info(f"Wrote layout {layout.id} to {output_path}")
    return output_path


def _figma_color(hex_color: str) -> dict[str, float]:
    r, g, b = ImageColor.getrgb(hex_color)[:3]
    return {"r": round(r / 255, 3), "g": round(g / 255, 3), "b": round(b / 255, 3)}


def _figma_node(element: LayoutElement) -> dict[str, Any]:
    node: dict[str, Any] = {
        "name": element.layer_name or element.id,
        "type": "RECTANGLE" if isinstance(element, ImageElement) else "TEXT",
        "x": element.x,
        "y": element.y,
        "width": element.width,
        "height": element.height,
        "rotation": element.rotation,
        "opacity": element.opacity,
        "visible": not element.hidden,
        "locked": element.locked,
        "strokeWeight": 1,
    }
    if isinstance(element, ImageElement):
        node["fills"] = [{"type": "SOLID", "color": _figma_color(element.background_color)}]
        node["strokes"] = [{"type": "SOLID", "color": IMAGE_STROKE}]
    elif isinstance(element, TextElement):
        node["characters"] = element.content
        node["style"] = {
            "fontFamily": element.font_family,
            "fontSize": element.font_size,
            "fontWeight": element.font_weight,
            "textAlignHorizontal": element.text_align.value.upper(),
            "lineHeightPercentFontSize": round(element.leading * 100, 1),
        }
        node["fills"] = [{"type": "SOLID", "color": _figma_color(element.color)}]
        node["strokes"] = [{"type": "SOLID", "color": TEXT_STROKE}]
    return node


def layout_to_figma(layout: GeneratedLayout) -> dict[str, Any]:
    """
    Convert a layout to a Figma-style frame tree.

    The root frame holds one child frame per page, laid out left to right;
    element nodes use page-relative mm coordinates and layer order.
    """
    config = layout.config
    page_width = config.page_width
    pages = []
    for page in range(1, layout.page_count + 1):
        pages.append({
            "name": f"Page {page}",
            "type": "FRAME",
            "x": (page - 1) * page_width,
            "y": 0,
            "width": page_width,
            "height": config.page_height,
            "children": [_figma_node(e) for e in layout.sorted_by_layer(page)],
        })
    return {
        "name": f"GridGenie Layout {layout.id}",
        "type": "FRAME",
        "width": page_width * layout.page_count,
        "height": config.page_height,
        "children": pages,
        "metadata": {
            "gridGenie": {
                "config": serialize_config(config),
                "generatedAt": layout.metadata.generated_at.isoformat(),
                "aestheticRule": layout.metadata.aesthetic_rule,
                "gridSystem": layout.metadata.grid_system,
            },
        },
    }


def write_figma_json(layout: GeneratedLayout, output_path: Path) -> Path:
    """
    Write the Figma-style document.

    Raises:
        ExportError: If the file cannot be written
    """
    try:
        data = layout_to_figma(layout)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write Figma JSON: {e}", output_path) from e
    logger.info(f"Wrote Figma JSON for {layout.id} to {output_path}")
    return output_path
