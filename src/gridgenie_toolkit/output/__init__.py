"""
Module: output

Purpose:
    Exporters for finished layouts. They read a GeneratedLayout and write
    files; none of them place or move elements.

Key Functions:
    - render_to_pdf(): PDF via ReportLab
    - render_svg() / write_svgs(): SVG per page
    - render_page_preview() / save_previews(): PNG thumbnails via Pillow
    - write_layout_json() / write_figma_json(): JSON documents

Dependencies:
    - reportlab: PDF generation
    - PIL: Preview rendering and colour parsing
"""

from .errors import ExportError
from .renderer import render_to_pdf
from .svg_writer import render_svg, write_svgs
from .preview import render_page_preview, save_previews
from .json_writer import layout_to_figma, write_figma_json, write_layout_json

__all__ = [
    "ExportError",
    "render_to_pdf",
    "render_svg",
    "write_svgs",
    "render_page_preview",
    "save_previews",
    "layout_to_figma",
    "write_figma_json",
    "write_layout_json",
]
