"""
Module: output.renderer

Purpose:
    Render a GeneratedLayout to PDF using ReportLab. Each document page
    becomes one PDF page; elements are drawn in layer order with their
    mm geometry converted to bottom-up PDF points.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation

Used By:
    - cli: generate --format pdf
"""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from gridgenie_toolkit.common.bindings import get_binding_spec
from gridgenie_toolkit.common.page_sizes import format_dimensions, get_orientation
from gridgenie_toolkit.core.models import (
    GeneratedLayout,
    ImageElement,
    LayoutElement,
    TextAlign,
    TextElement,
)
from gridgenie_toolkit.engine.grid.geometry import GridGeometry

from .errors import ExportError

logger = logging.getLogger(__name__)

# Guide colours
MARGIN_GUIDE_COLOR = HexColor("#ff00ff")
GRID_GUIDE_COLOR = HexColor("#00a2ff")
PLACEHOLDER_STROKE = HexColor("#7a9cc6")
LABEL_FONT = "Helvetica"
LABEL_FONT_SIZE = 8

_FONTS = {
    "normal": "Helvetica",
    "bold": "Helvetica-Bold",
}


def render_to_pdf(
    layout: GeneratedLayout,
    output_path: Path,
    *,
    show_guides: bool = True,
) -> Path:
    """
    Render a layout to a PDF file.

    Hidden elements are skipped. Pages without elements are still emitted
    so the PDF always has config.page_count pages.

    Args:
        layout: Layout to render
        output_path: Path to write PDF
        show_guides: Draw margin and grid guides

    Returns:
        The written path

    Raises:
        ExportError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(layout, Path("output/layout.pdf"))
    """
    config = layout.config
    page_width_pt = config.page_width * mm
    page_height_pt = config.page_height * mm

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        c = canvas.Canvas(str(output_path), pagesize=(page_width_pt, page_height_pt))
        c.setTitle(f"GridGenie layout {layout.id}")
        c.setSubject(
            f"{layout.page_count} {get_orientation(config.page_width, config.page_height)} pages, "
            f"{format_dimensions(config.page_width, config.page_height)}, "
            f"{get_binding_spec(config.binding_type).label}"
        )
        for page in range(1, layout.page_count + 1):
            if show_guides:
                _draw_guides(c, layout, page, page_height_pt)
            drawn = 0
            for element in layout.sorted_by_layer(page):
                if element.hidden:
                    continue
                _draw_element(c, element, page_height_pt)
                drawn += 1
            logger.debug(f"Page {page}: {drawn} elements drawn")
            c.showPage()
        c.save()
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write PDF: {e}", output_path) from e

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")
    return output_path


def _to_pdf_rect(element: LayoutElement, page_height_pt: float) -> tuple[float, float, float, float]:
    """Top-down mm geometry -> bottom-up (x, y, width, height) in points."""
    width_pt = element.width * mm
    height_pt = element.height * mm
    x_pt = element.x * mm
    y_pt = page_height_pt - element.y * mm - height_pt
    return x_pt, y_pt, width_pt, height_pt


def _draw_guides(c: canvas.Canvas, layout: GeneratedLayout, page: int, page_height_pt: float) -> None:
    """Margin box and grid cells as thin coloured outlines."""
    config = layout.config
    geometry = GridGeometry.for_page(config, page)
    left = config.left_margin_for(page)
    content_width = config.page_width - left - config.right_margin_for(page)

    c.saveState()
    c.setLineWidth(0.3)
    c.setStrokeColor(MARGIN_GUIDE_COLOR)
    c.rect(
        left * mm,
        page_height_pt - (config.margin_top + config.content_height) * mm,
        content_width * mm,
        config.content_height * mm,
        stroke=1,
        fill=0,
    )

    c.setStrokeColor(GRID_GUIDE_COLOR)
    c.setDash(1, 2)
    for row in range(geometry.rows):
        for col in range(geometry.columns):
            x = geometry.cell_x(col)
            y = geometry.cell_y(row)
            c.rect(
                x * mm,
                page_height_pt - (y + geometry.cell_height) * mm,
                geometry.cell_width * mm,
                geometry.cell_height * mm,
                stroke=1,
                fill=0,
            )
    c.restoreState()


def _draw_element(c: canvas.Canvas, element: LayoutElement, page_height_pt: float) -> None:
    x_pt, y_pt, width_pt, height_pt = _to_pdf_rect(element, page_height_pt)

    c.saveState()
    # Rotate around the element centre; screen rotation is clockwise
    c.translate(x_pt + width_pt / 2, y_pt + height_pt / 2)
    if element.rotation:
        c.rotate(-element.rotation)
    c.setFillAlpha(element.opacity)
    c.setStrokeAlpha(element.opacity)

    if isinstance(element, ImageElement):
        _draw_image_placeholder(c, element, width_pt, height_pt)
    elif isinstance(element, TextElement):
        _draw_text(c, element, width_pt, height_pt)
    c.restoreState()


def _draw_image_placeholder(
    c: canvas.Canvas, element: ImageElement, width_pt: float, height_pt: float
) -> None:
    """Filled box with a cross and a size label, centred on the origin."""
    left, bottom = -width_pt / 2, -height_pt / 2
    c.setFillColor(HexColor(element.background_color))
    c.setStrokeColor(PLACEHOLDER_STROKE)
    c.setLineWidth(0.5)
    c.rect(left, bottom, width_pt, height_pt, stroke=1, fill=1)
    c.line(left, bottom, left + width_pt, bottom + height_pt)
    c.line(left, bottom + height_pt, left + width_pt, bottom)

    label = f"Image {round(element.width)}x{round(element.height)}mm"
    c.setFillColor(PLACEHOLDER_STROKE)
    c.setFont(LABEL_FONT, LABEL_FONT_SIZE)
    c.drawCentredString(0, -LABEL_FONT_SIZE / 2, label)


def _font_for(element: TextElement) -> str:
    if element.font_weight in ("bold", "600", "700", "800", "900"):
        return _FONTS["bold"]
    return _FONTS["normal"]


def _apply_transform(text: str, transform: str) -> str:
    if transform == "uppercase":
        return text.upper()
    if transform == "lowercase":
        return text.lower()
    if transform == "capitalize":
        return text.title()
    return text


def _draw_text(c: canvas.Canvas, element: TextElement, width_pt: float, height_pt: float) -> None:
    """
    Wrapped text clipped to the element box.

    Justified text is drawn left-aligned; line filling is approximate.
    """
    left, top = -width_pt / 2, height_pt / 2
    font = _font_for(element)
    size = element.font_size
    line_height = size * element.leading

    c.setFillColor(HexColor(element.color))
    c.setFont(font, size)

    clip = c.beginPath()
    clip.rect(left, -height_pt / 2, width_pt, height_pt)
    c.clipPath(clip, stroke=0, fill=0)

    text = _apply_transform(element.content, element.text_transform)
    y = top - size
    for paragraph in text.split("\n"):
        lines = simpleSplit(paragraph, font, size, width_pt) or [""]
        for line in lines:
            if y < -height_pt / 2:
                return
            if element.text_align is TextAlign.CENTER:
                c.drawCentredString(0, y, line)
            elif element.text_align is TextAlign.RIGHT:
                c.drawRightString(left + width_pt, y, line)
            else:
                c.drawString(left, y, line)
            y -= line_height
