"""
Module: output.svg_writer

Purpose:
    Export each page of a layout as an SVG document in mm units: bleed
    and margin guides, the grid, and one block per visible element.

Key Functions:
    - render_svg(): One page -> SVG string
    - write_svgs(): Every page -> page-NNN.svg files

Dependencies:
    - xml.etree.ElementTree (std)
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from gridgenie_toolkit.core.models import GeneratedLayout, ImageElement, LayoutElement, TextElement
from gridgenie_toolkit.engine.grid.geometry import GridGeometry

from .errors import ExportError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _rect(parent: ET.Element, x: float, y: float, w: float, h: float, **attrs: str) -> ET.Element:
    return ET.SubElement(
        parent, "rect",
        {"x": _fmt(x), "y": _fmt(y), "width": _fmt(w), "height": _fmt(h), **attrs},
    )


def render_svg(layout: GeneratedLayout, page: int, *, show_guides: bool = True) -> str:
    """
    Render one page as an SVG string.

    The viewBox includes the bleed on every side, so page coordinates are
    offset by config.bleed.

    Raises:
        ValueError: If page is outside 1..page_count
    """
    config = layout.config
    if not 1 <= page <= layout.page_count:
        raise ValueError(f"page must be within 1..{layout.page_count}: {page}")

    bleed = config.bleed
    width = config.page_width + 2 * bleed
    height = config.page_height + 2 * bleed
    root = ET.Element("svg", {
        "xmlns": SVG_NS,
        "width": f"{_fmt(width)}mm",
        "height": f"{_fmt(height)}mm",
        "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
    })
    ET.SubElement(root, "title").text = f"{layout.id} page {page}"
    _rect(root, 0, 0, width, height, fill="#ffffff")

    content = ET.SubElement(root, "g", {"transform": f"translate({_fmt(bleed)},{_fmt(bleed)})"})
    if show_guides:
        _add_guides(content, layout, page)

    for element in layout.sorted_by_layer(page):
        if element.hidden:
            continue
        _add_element(content, element)

    return ET.tostring(root, encoding="unicode")


def _add_guides(parent: ET.Element, layout: GeneratedLayout, page: int) -> None:
    config = layout.config
    guides = ET.SubElement(parent, "g", {"id": "guides", "fill": "none", "stroke-width": "0.2"})
    bleed = config.bleed
    _rect(
        guides, -bleed, -bleed, config.page_width + 2 * bleed, config.page_height + 2 * bleed,
        stroke="#ff0000", **{"stroke-dasharray": "2 1"},
    )
    left = config.left_margin_for(page)
    _rect(
        guides, left, config.margin_top,
        config.page_width - left - config.right_margin_for(page), config.content_height,
        stroke="#ff00ff",
    )
    geometry = GridGeometry.for_page(config, page)
    grid = ET.SubElement(guides, "g", {"id": "grid", "stroke": "#00a2ff", "stroke-dasharray": "1 2"})
    for row in range(geometry.rows):
        for col in range(geometry.columns):
            _rect(grid, geometry.cell_x(col), geometry.cell_y(row), geometry.cell_width, geometry.cell_height)


def _add_element(parent: ET.Element, element: LayoutElement) -> None:
    attrs = {"id": element.id, "opacity": _fmt(element.opacity)}
    if element.rotation:
        cx = element.x + element.width / 2
        cy = element.y + element.height / 2
        attrs["transform"] = f"rotate({_fmt(element.rotation)} {_fmt(cx)} {_fmt(cy)})"
    group = ET.SubElement(parent, "g", attrs)

    if isinstance(element, ImageElement):
        _rect(
            group, element.x, element.y, element.width, element.height,
            fill=element.background_color, stroke="#7a9cc6", **{"stroke-width": "0.3"},
        )
        ET.SubElement(group, "image", {
            "href": element.content,
            "x": _fmt(element.x), "y": _fmt(element.y),
            "width": _fmt(element.width), "height": _fmt(element.height),
            "preserveAspectRatio": "xMidYMid slice",
        })
    elif isinstance(element, TextElement):
        # Font size is in points; the SVG user unit is mm
        size_mm = element.font_size * 25.4 / 72
        anchor = {"center": "middle", "right": "end"}.get(element.text_align.value, "start")
        x = {
            "middle": element.x + element.width / 2,
            "end": element.right,
        }.get(anchor, element.x)
        text = ET.SubElement(group, "text", {
            "x": _fmt(x),
            "y": _fmt(element.y + size_mm),
            "font-family": element.font_family,
            "font-size": _fmt(size_mm),
            "font-weight": element.font_weight,
            "fill": element.color,
            "text-anchor": anchor,
        })
        first_line = element.content.split("\n", 1)[0]
        text.text = first_line


def write_svgs(layout: GeneratedLayout, output_dir: Path, *, show_guides: bool = True) -> list[Path]:
    """
    Write page-001.svg, page-002.svg, ... into output_dir.

    Raises:
        ExportError: If a file cannot be written
    """
    paths = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for page in range(1, layout.page_count + 1):
            path = output_dir / f"page-{page:03d}.svg"
            path.write_text(render_svg(layout, page, show_guides=show_guides), encoding="utf-8")
            paths.append(path)
    except OSError as e:
        raise ExportError(f"Failed to write SVG: {e}", output_dir) from e
    logger.info(f"Wrote {len(paths)} SVG pages to {output_dir}")
    return paths
