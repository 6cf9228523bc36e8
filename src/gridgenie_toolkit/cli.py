"""
Module: cli

Purpose:
    Command-line entry point (`gridgenie`).

    gridgenie generate --config cfg.json --output out/ --format pdf svg png json figma
    gridgenie validate out/layout.json

Key Functions:
    - main(): Parse arguments and dispatch; returns the exit code
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from gridgenie_toolkit import __version__
from gridgenie_toolkit.common.logging_utils import configure_logging
from gridgenie_toolkit.core.models import LayoutConfig
from gridgenie_toolkit.core.schemas.validator import ValidationError
from gridgenie_toolkit.core.utils.serialization import load_config_json, load_layout_json
from gridgenie_toolkit.engine.generation.generator import GenerationMode
from gridgenie_toolkit.engine.placement.factory import ElementFactory
from gridgenie_toolkit.engine.placement.ids import SequentialIdProvider
from gridgenie_toolkit.engine.session import LayoutSession, SessionError
from gridgenie_toolkit.engine.text.lorem import LoremGenerator
from gridgenie_toolkit.output import (
    ExportError,
    render_to_pdf,
    save_previews,
    write_figma_json,
    write_layout_json,
    write_svgs,
)

logger = logging.getLogger(__name__)

FORMATS = ("pdf", "svg", "png", "json", "figma")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridgenie",
        description="Grid-based print layout generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a layout and export it")
    gen.add_argument("--config", type=Path, help="Layout config JSON (defaults if omitted)")
    gen.add_argument("--output", type=Path, default=Path("output"), help="Output directory")
    gen.add_argument(
        "--format", nargs="+", choices=FORMATS, default=["pdf", "json"],
        help="Export formats (default: pdf json)",
    )
    gen.add_argument(
        "--mode", choices=[m.value for m in GenerationMode], default=GenerationMode.FIXED.value,
        help="Generation mode (default: fixed)",
    )
    gen.add_argument("--aesthetics", action="store_true", help="Apply the config's aesthetic rule")
    gen.add_argument("--no-guides", action="store_true", help="Omit margin and grid guides")
    gen.add_argument("--seed", type=int, help="Seed placeholder text and use sequential ids")

    val = sub.add_parser("validate", help="Validate a layout JSON document")
    val.add_argument("layout", type=Path, help="Layout JSON file")
    return parser


def _generate(args: argparse.Namespace) -> int:
    config = load_config_json(args.config) if args.config else LayoutConfig()
    if args.seed is not None:
        factory = ElementFactory(
            id_provider=SequentialIdProvider(),
            text_provider=LoremGenerator(seed=args.seed),
        )
    else:
        factory = ElementFactory()

    session = LayoutSession(
        config, mode=args.mode, factory=factory, apply_aesthetics=args.aesthetics
    )
    layout = session.generate()
    for warning in layout.warnings:
        logger.warning(warning)

    output: Path = args.output
    show_guides = not args.no_guides
    formats = set(args.format)
    if "pdf" in formats:
        render_to_pdf(layout, output / "layout.pdf", show_guides=show_guides)
    if "svg" in formats:
        write_svgs(layout, output / "svg", show_guides=show_guides)
    if "png" in formats:
        save_previews(layout, output / "preview")
    if "json" in formats:
        write_layout_json(layout, output / "layout.json")
    if "figma" in formats:
        write_figma_json(layout, output / "layout.figma.json")

    logger.info(f"Generated {layout.element_count} elements on {layout.page_count} pages -> {output}")
    return 0


def _validate(args: argparse.Namespace) -> int:
    layout = load_layout_json(args.layout)
    logger.info(f"{args.layout}: valid ({layout.element_count} elements, {layout.page_count} pages)")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        if args.command == "generate":
            return _generate(args)
        return _validate(args)
    except ValidationError as e:
        logger.error(f"Invalid layout: {e}")
        for error in e.errors:
            logger.error(f"  - {error}")
        return 1
    except (SessionError, ExportError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
