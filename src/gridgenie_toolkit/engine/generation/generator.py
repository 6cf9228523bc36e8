"""
Module: engine.generation.generator

Purpose:
    Produce a GeneratedLayout from a LayoutConfig. Each page (or spread)
    is planned in grid space, optionally adjusted by an aesthetic rule,
    then committed to absolute geometry through the ElementFactory.

Key Functions:
    - generate_layout(): Main entry point

Key Classes:
    - GenerationMode: FIXED template, COUNTS-driven, or rotating PATTERNS

Modes:
    FIXED     Four elements per page at fixed cells; counts are ignored.
    COUNTS    text_count / image_count spread over the pages, first-fit.
    PATTERNS  Named page (or spread) arrangements rotated page by page.

Used By:
    - engine.session: generate()
    - cli: generate command
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Optional

from gridgenie_toolkit.common.bindings import spine_width
from gridgenie_toolkit.core.models import (
    ElementPlan,
    ElementType,
    GeneratedLayout,
    LayoutConfig,
    LayoutElement,
    LayoutMetadata,
    PageDimensions,
    TextRole,
)
from gridgenie_toolkit.engine.grid.geometry import GridGeometry
from gridgenie_toolkit.engine.grid.occupancy import GridOccupancy
from gridgenie_toolkit.engine.placement.aesthetics import apply_aesthetic_rule
from gridgenie_toolkit.engine.placement.factory import ElementFactory

from .patterns import (
    CONTENT_PRIORITIES,
    FIXED_TEMPLATE,
    SINGLE_PAGE_PATTERNS,
    SPREAD_PATTERNS,
    LayoutPattern,
    scale_slot,
    slot_kind,
)

logger = logging.getLogger(__name__)

# Footprints used by COUNTS mode (columns, rows), clipped to the grid
COUNT_FOOTPRINTS = {
    "title": (4, 1),
    "body": (3, 3),
    "image": (2, 2),
}
MAX_SIZE_REDUCTION = 2


class GenerationMode(str, Enum):
    FIXED = "fixed"
    COUNTS = "counts"
    PATTERNS = "patterns"


def generate_layout(
    config: LayoutConfig,
    *,
    mode: GenerationMode | str = GenerationMode.FIXED,
    factory: Optional[ElementFactory] = None,
    apply_aesthetics: bool = False,
) -> GeneratedLayout:
    """
    Generate a layout for every page of the document.

    Args:
        config: Layout configuration (read-only)
        mode: Generation mode (default FIXED)
        factory: Element factory; inject one with SequentialIdProvider for
            deterministic ids
        apply_aesthetics: Apply config.aesthetic_rule to each page's plans
            before committing geometry

    Returns:
        GeneratedLayout with elements in page order

    Example:
        >>> layout = generate_layout(LayoutConfig(page_count=2))
        >>> len(layout.elements)
        8
    """
    mode = GenerationMode(mode)
    factory = factory or ElementFactory()
    geometry = GridGeometry.for_page(config, 1)
    columns, rows = geometry.columns, geometry.rows
    warnings: list[str] = []

    logger.info(
        f"Generating {mode.value} layout: {config.page_count} pages, "
        f"{columns}x{rows} grid{' (spreads)' if config.spread_view else ''}"
    )

    if mode is GenerationMode.FIXED:
        plans = _plan_fixed(config)
    elif mode is GenerationMode.COUNTS:
        plans = _plan_counts(config, columns, rows, warnings)
    else:
        plans = _plan_patterns(config, columns, rows, warnings)

    if apply_aesthetics:
        plans = _apply_aesthetics(plans, config.aesthetic_rule, columns, rows)

    elements = [_commit(factory, config, plan) for plan in plans]

    is_spread = config.spread_view
    page_width = config.page_width
    width = page_width * 2 + config.binding_gutter if is_spread else page_width
    metadata = LayoutMetadata(
        aesthetic_rule=config.aesthetic_rule,
        grid_system=config.grid_system,
        grid_size=f"{columns * 2 if is_spread else columns}x{rows}",
        generated_at=datetime.now(),
        element_count=len(elements),
        is_spread=is_spread,
        content_type=config.content_type,
        generation_mode=mode.value,
        spine_width=spine_width(config.binding_type, config.page_count, config.gsm),
    )
    layout = GeneratedLayout(
        id=factory.id_provider.layout_id(),
        elements=tuple(elements),
        dimensions=PageDimensions(width=width, height=config.page_height),
        metadata=metadata,
        config=config,
        warnings=tuple(warnings),
    )
    logger.info(
        f"Layout {layout.id} complete: {layout.element_count} elements "
        f"across {config.page_count} pages"
    )
    return layout


def _commit(factory: ElementFactory, config: LayoutConfig, plan: ElementPlan) -> LayoutElement:
    if plan.element_type is ElementType.IMAGE:
        return factory.create_image_element(
            config, plan.page, plan.grid_x, plan.grid_y,
            plan.grid_width, plan.grid_height, priority=plan.priority,
        )
    return factory.create_text_element(
        config, plan.page, plan.grid_x, plan.grid_y,
        plan.grid_width, plan.grid_height,
        plan.text_role or TextRole.BODY, priority=plan.priority,
    )


def _make_plan(kind: str, page: int, index: int, x: int, y: int, w: int, h: int, **kwargs) -> ElementPlan:
    element_type, role = slot_kind(kind)
    return ElementPlan(
        id=f"{kind}-{page}-{index}",
        element_type=element_type,
        grid_x=x,
        grid_y=y,
        grid_width=w,
        grid_height=h,
        priority=CONTENT_PRIORITIES[kind],
        text_role=role,
        page=page,
        **kwargs,
    )


def _apply_aesthetics(
    plans: list[ElementPlan], rule: str, columns: int, rows: int
) -> list[ElementPlan]:
    """Apply the rule page by page, keeping page order."""
    result: list[ElementPlan] = []
    pages = sorted({plan.page for plan in plans})
    for page in pages:
        page_plans = [plan for plan in plans if plan.page == page]
        result.extend(apply_aesthetic_rule(page_plans, rule, columns, rows))
    return result


def _place_with_reduction(
    occupancy: GridOccupancy,
    plan: ElementPlan,
    preferred: Optional[tuple[int, int]] = None,
) -> Optional[ElementPlan]:
    """
    Place a plan: preferred cell, then first fit, then shrinking the span
    by up to MAX_SIZE_REDUCTION cells. Returns the placed plan or None.
    """
    px, py = preferred if preferred is not None else (None, None)
    position = occupancy.find_available_space(
        plan.grid_width, plan.grid_height, px, py, plan.spread_position
    )
    width, height = plan.grid_width, plan.grid_height
    if position is None:
        for reduction in range(1, MAX_SIZE_REDUCTION + 1):
            width = max(1, plan.grid_width - reduction)
            height = max(1, plan.grid_height - reduction)
            position = occupancy.find_available_space(
                width, height, spread_position=plan.spread_position
            )
            if position is not None:
                logger.debug(f"Placed {plan.id} with reduced size {width}x{height}")
                break
    if position is None:
        return None
    occupancy.occupy(position.grid_x, position.grid_y, width, height)
    return replace(
        plan, grid_x=position.grid_x, grid_y=position.grid_y,
        grid_width=width, grid_height=height,
    )


# ─────────────────────────────────────────────────────────────────────────────
# FIXED
# ─────────────────────────────────────────────────────────────────────────────

def _plan_fixed(config: LayoutConfig) -> list[ElementPlan]:
    plans = []
    for page in range(1, config.page_count + 1):
        for index, (kind, rect) in enumerate(FIXED_TEMPLATE):
            plans.append(_make_plan(kind, page, index, rect.x, rect.y, rect.width, rect.height))
        logger.debug(f"Page {page}: fixed template, {len(FIXED_TEMPLATE)} elements")
    return plans


# ─────────────────────────────────────────────────────────────────────────────
# COUNTS
# ─────────────────────────────────────────────────────────────────────────────

def distribute(total: int, pages: int) -> list[int]:
    """
    Split total over pages; earlier pages take the remainder.

    Example:
        >>> distribute(7, 3)
        [3, 2, 2]
    """
    base, extra = divmod(total, pages)
    return [base + (1 if i < extra else 0) for i in range(pages)]


def _page_sequence(texts: int, images: int) -> list[str]:
    """Heading first, then images and body texts alternating."""
    kinds: list[str] = []
    if texts > 0:
        kinds.append("title")
        texts -= 1
    turn_image = True
    while texts > 0 or images > 0:
        if images > 0 and (turn_image or texts == 0):
            kinds.append("image")
            images -= 1
        else:
            kinds.append("body")
            texts -= 1
        turn_image = not turn_image
    return kinds


def _plan_counts(
    config: LayoutConfig, columns: int, rows: int, warnings: list[str]
) -> list[ElementPlan]:
    pages = config.page_count
    text_split = distribute(config.text_count, pages)
    image_split = distribute(config.image_count, pages)
    plans: list[ElementPlan] = []

    for page in range(1, pages + 1):
        occupancy = GridOccupancy(columns, rows)
        kinds = _page_sequence(text_split[page - 1], image_split[page - 1])
        placed = 0
        for index, kind in enumerate(kinds):
            w, h = COUNT_FOOTPRINTS[kind]
            plan = _make_plan(kind, page, index, 0, 0, min(w, columns), min(h, rows))
            result = _place_with_reduction(occupancy, plan)
            if result is None:
                message = f"Page {page}: no room for {kind} element {index + 1}, skipped"
                logger.warning(message)
                warnings.append(message)
                continue
            plans.append(result)
            placed += 1
        logger.debug(f"Page {page}: {placed}/{len(kinds)} elements placed")
    return plans


# ─────────────────────────────────────────────────────────────────────────────
# PATTERNS
# ─────────────────────────────────────────────────────────────────────────────

def _plan_pattern(
    pattern: LayoutPattern,
    page: int,
    columns: int,
    rows: int,
    *,
    spread: bool,
    warnings: list[str],
) -> list[ElementPlan]:
    """
    Place one pattern. Slots are placed highest priority first; the result
    keeps that order.
    """
    occupancy = GridOccupancy(columns, rows, spread=spread)
    slots = [scale_slot(slot, columns, rows) for slot in pattern.slots]
    order = sorted(range(len(slots)), key=lambda i: -slots[i].priority)

    placed: list[ElementPlan] = []
    for index in order:
        slot = slots[index]
        plan = _make_plan(
            slot.kind, page, index, 0, 0,
            min(slot.grid_width, occupancy.total_columns), min(slot.grid_height, rows),
            spread_position=slot.spread_position if spread else None,
        )
        result = _place_with_reduction(occupancy, plan, (slot.preferred_x, slot.preferred_y))
        if result is None:
            message = f"Page {page}: pattern {pattern.name!r} has no room for {slot.kind}, skipped"
            logger.warning(message)
            warnings.append(message)
            continue
        placed.append(result)
    return placed


def _split_spread(plans: list[ElementPlan], left_page: int, columns: int) -> list[ElementPlan]:
    """Move plans whose origin lies right of the binding onto the right-hand page."""
    result = []
    for plan in plans:
        if plan.grid_x >= columns:
            plan = replace(plan, grid_x=plan.grid_x - columns, page=left_page + 1)
        result.append(plan)
    return result


def _plan_patterns(
    config: LayoutConfig, columns: int, rows: int, warnings: list[str]
) -> list[ElementPlan]:
    plans: list[ElementPlan] = []
    pages = config.page_count

    if not config.spread_view:
        for page in range(1, pages + 1):
            pattern = SINGLE_PAGE_PATTERNS[(page - 1) % len(SINGLE_PAGE_PATTERNS)]
            logger.debug(f"Page {page}: pattern {pattern.name!r}")
            plans.extend(_plan_pattern(pattern, page, columns, rows, spread=False, warnings=warnings))
        return plans

    for page in range(1, pages + 1, 2):
        if page + 1 <= pages:
            # One pattern per spread, in table order
            pattern = SPREAD_PATTERNS[((page - 1) // 2) % len(SPREAD_PATTERNS)]
            logger.debug(f"Spread {page}-{page + 1}: pattern {pattern.name!r}")
            spread_plans = _plan_pattern(pattern, page, columns, rows, spread=True, warnings=warnings)
            plans.extend(_split_spread(spread_plans, page, columns))
        else:
            # Trailing odd page is laid out on its own
            pattern = SINGLE_PAGE_PATTERNS[(page - 1) % len(SINGLE_PAGE_PATTERNS)]
            logger.debug(f"Page {page}: single pattern {pattern.name!r}")
            plans.extend(_plan_pattern(pattern, page, columns, rows, spread=False, warnings=warnings))
    return plans
