"""
Module: output.preview

Purpose:
    PNG thumbnails of layout pages for quick inspection. Elements are
    drawn as coloured blocks (images with a cross, text as grey bars)
    over the margin and grid guides.

Key Functions:
    - render_page_preview(): One page -> PIL image
    - save_previews(): Every page -> page-NNN.png files

Dependencies:
    - PIL: Image drawing
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from gridgenie_toolkit.core.models import GeneratedLayout, ImageElement, LayoutElement, TextElement
from gridgenie_toolkit.engine.grid.geometry import GridGeometry

from .errors import ExportError

logger = logging.getLogger(__name__)

# Preview constants
DEFAULT_SCALE = 2.0  # Pixels per mm
BACKGROUND = (255, 255, 255, 255)
MARGIN_COLOR = (255, 0, 255, 160)
GRID_COLOR = (0, 162, 255, 70)
IMAGE_OUTLINE = (122, 156, 198, 255)
TEXT_FILL = (120, 120, 120)
TEXT_BAR_RATIO = 0.6  # Bar height as a fraction of line height
FONT_SIZE = 10


def _rotated_box(element: LayoutElement, scale: float) -> list[tuple[float, float]]:
    """Corners of the element box in pixels, rotated about its centre."""
    cx = (element.x + element.width / 2) * scale
    cy = (element.y + element.height / 2) * scale
    hw = element.width * scale / 2
    hh = element.height * scale / 2
    angle = math.radians(element.rotation)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    corners = [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
    return [(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a) for dx, dy in corners]


def _rgba(color: str, opacity: float) -> tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, round(255 * opacity)


def render_page_preview(
    layout: GeneratedLayout,
    page: int,
    *,
    scale: float = DEFAULT_SCALE,
    show_guides: bool = True,
) -> Image.Image:
    """
    Render one page as an RGB image of page_width x page_height mm at
    `scale` pixels per mm.

    Raises:
        ValueError: If page is outside 1..page_count or scale <= 0

    Example:
        >>> img = render_page_preview(layout, 1, scale=1.0)
        >>> img.size
        (210, 297)
    """
    if not 1 <= page <= layout.page_count:
        raise ValueError(f"page must be within 1..{layout.page_count}: {page}")
    if scale <= 0:
        raise ValueError(f"scale must be positive: {scale}")

    config = layout.config
    size = (round(config.page_width * scale), round(config.page_height * scale))
    image = Image.new("RGBA", size, BACKGROUND)
    overlay = Image.new("RGBA", size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(overlay)

    try:
        font = ImageFont.truetype("Arial.ttf", FONT_SIZE)
    except (IOError, OSError):
        font = ImageFont.load_default()

    if show_guides:
        _draw_guides(draw, layout, page, scale)

    for element in layout.sorted_by_layer(page):
        if element.hidden:
            continue
        if isinstance(element, ImageElement):
            _draw_image(draw, element, scale, font)
        elif isinstance(element, TextElement):
            _draw_text(draw, element, scale)

    image = Image.alpha_composite(image, overlay)
    return image.convert("RGB")


def _draw_guides(draw: ImageDraw.ImageDraw, layout: GeneratedLayout, page: int, scale: float) -> None:
    config = layout.config
    geometry = GridGeometry.for_page(config, page)
    for row in range(geometry.rows):
        for col in range(geometry.columns):
            x = geometry.cell_x(col) * scale
            y = geometry.cell_y(row) * scale
            draw.rectangle(
                [x, y, x + geometry.cell_width * scale, y + geometry.cell_height * scale],
                outline=GRID_COLOR,
            )
    left = config.left_margin_for(page) * scale
    right = (config.page_width - config.right_margin_for(page)) * scale
    top = config.margin_top * scale
    bottom = (config.page_height - config.margin_bottom) * scale
    draw.rectangle([left, top, right, bottom], outline=MARGIN_COLOR)


def _draw_image(
    draw: ImageDraw.ImageDraw,
    element: ImageElement,
    scale: float,
    font: ImageFont.ImageFont,
) -> None:
    box = _rotated_box(element, scale)
    draw.polygon(box, fill=_rgba(element.background_color, element.opacity), outline=IMAGE_OUTLINE)
    draw.line([box[0], box[2]], fill=IMAGE_OUTLINE)
    draw.line([box[1], box[3]], fill=IMAGE_OUTLINE)
    if not element.rotation:
        label = f"{round(element.width)}x{round(element.height)}"
        draw.text((box[0][0] + 3, box[0][1] + 3), label, fill=IMAGE_OUTLINE, font=font)


def _draw_text(draw: ImageDraw.ImageDraw, element: TextElement, scale: float) -> None:
    """One grey bar per estimated line of text; rotated text gets a box."""
    color = (*TEXT_FILL, round(255 * element.opacity))
    if element.rotation:
        draw.polygon(_rotated_box(element, scale), outline=color)
        return
    line_height_mm = element.font_size * element.leading * 25.4 / 72
    bar_height = max(1.0, line_height_mm * TEXT_BAR_RATIO * scale)
    x0 = element.x * scale
    x1 = element.right * scale
    y = element.y * scale
    bottom = element.bottom * scale
    while y + bar_height <= bottom:
        draw.rectangle([x0, y, x1, y + bar_height], fill=color)
        y += line_height_mm * scale


def save_previews(
    layout: GeneratedLayout,
    output_dir: Path,
    *,
    scale: float = DEFAULT_SCALE,
) -> list[Path]:
    """
    Write page-001.png, page-002.png, ... into output_dir.

    Raises:
        ExportError: If a file cannot be written
    """
    paths = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for page in range(1, layout.page_count + 1):
            path = output_dir / f"page-{page:03d}.png"
            render_page_preview(layout, page, scale=scale).save(path, format="PNG")
            paths.append(path)
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write preview: {e}", output_dir) from e
    logger.info(f"Wrote {len(paths)} PNG previews to {output_dir}")
    return paths
