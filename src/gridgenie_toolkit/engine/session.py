"""
Module: engine.session

Purpose:
    Application state for an interactive editing session. Owns the active
    config and layout and applies every edit by replacing the layout with
    a new immutable one. The placement functions stay pure; all mutation
    happens here.

Key Classes:
    - LayoutSession: Generate, add, update, delete, reorder elements
    - SessionError: Base exception for rejected actions
    - ElementNotFoundError / ElementLockedError / CapacityError /
      InvalidUpdateError: Specific failures

Editing contract:
    - Updates keep width/height > 0, x/y >= 0 and page in 1..page_count
    - Locked elements reject geometry changes (x, y, width, height, page,
      rotation); other attributes, including the lock itself, can change
    - With snap_to_grid on, geometry edits snap to the nearest cells and
      refresh the element's grid footprint; with it off the footprint is
      cleared and the finder falls back to back-projection

Used By:
    - cli: generate command
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Optional

from gridgenie_toolkit.common.thresholds import SESSION_THRESHOLDS, SessionThresholds
from gridgenie_toolkit.core.models import (
    ElementPlan,
    ElementType,
    GeneratedLayout,
    GridRect,
    LayoutConfig,
    LayoutElement,
    TextAlign,
    TextElement,
    TextRole,
)

from .generation.generator import GenerationMode, generate_layout
from .grid.geometry import GridGeometry
from .placement.aesthetics import apply_aesthetic_rule as apply_rule_to_plans
from .placement.factory import ElementFactory
from .placement.finder import element_footprint, find_next_available_position

logger = logging.getLogger(__name__)

GEOMETRY_FIELDS = frozenset({"x", "y", "width", "height", "page", "rotation"})
SNAPPED_FIELDS = frozenset({"x", "y", "width", "height", "page"})
READ_ONLY_FIELDS = frozenset({"id", "grid"})


class SessionError(Exception):
    """Editing action rejected."""
    pass


class ElementNotFoundError(SessionError):
    """No element with the given id."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Element not found: {element_id}")


class ElementLockedError(SessionError):
    """Geometry change requested on a locked element."""

    def __init__(self, element_id: str, fields_: set[str]):
        self.element_id = element_id
        self.fields = fields_
        super().__init__(f"Element {element_id} is locked; cannot change {sorted(fields_)}")


class CapacityError(SessionError):
    """Requested elements exceed the grid capacity of the document."""
    pass


class InvalidUpdateError(SessionError):
    """Update would violate element or config invariants."""
    pass


class LayoutSession:
    """
    Interactive editing session.

    Example:
        >>> session = LayoutSession(LayoutConfig(page_count=2))
        >>> layout = session.generate()
        >>> element = session.add_element(ElementType.IMAGE, page=1)
        >>> session.update_element(element.id, locked=True).locked
        True
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        *,
        mode: GenerationMode | str = GenerationMode.FIXED,
        factory: Optional[ElementFactory] = None,
        apply_aesthetics: bool = False,
        thresholds: SessionThresholds = SESSION_THRESHOLDS,
    ) -> None:
        self.config = config or LayoutConfig()
        self.mode = GenerationMode(mode)
        self.factory = factory or ElementFactory()
        self.apply_aesthetics = apply_aesthetics
        self.thresholds = thresholds
        self._layout: Optional[GeneratedLayout] = None

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def layout(self) -> Optional[GeneratedLayout]:
        """Current layout, or None before the first generate()."""
        return self._layout

    def _require_layout(self) -> GeneratedLayout:
        if self._layout is None:
            raise SessionError("No layout generated yet")
        return self._layout

    def _find(self, element_id: str) -> LayoutElement:
        element = self._require_layout().get_element(element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        return element

    def _replace_element(self, updated: LayoutElement) -> None:
        layout = self._require_layout()
        self._layout = layout.with_elements(
            updated if e.id == updated.id else e for e in layout.elements
        )

    def _check_page(self, page: int) -> None:
        if not 1 <= page <= self.config.page_count:
            raise InvalidUpdateError(
                f"page must be within 1..{self.config.page_count}: {page}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Config and generation
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def capacity_per_page(self) -> int:
        geometry = GridGeometry.for_page(self.config, 1)
        return geometry.columns * geometry.rows

    def check_capacity(self) -> None:
        """
        Raise CapacityError if the requested element mix cannot fit.

        Every element needs at least one cell, so the document holds at most
        capacity_per_page * page_count elements.
        """
        capacity = self.capacity_per_page * self.config.page_count
        requested = self.config.requested_elements
        if requested > capacity:
            raise CapacityError(
                f"{requested} elements requested but the grid holds at most {capacity} "
                f"({self.capacity_per_page} cells x {self.config.page_count} pages)"
            )

    def update_config(self, **changes: Any) -> LayoutConfig:
        """
        Replace config values. The current layout is kept until the next
        generate().

        Raises:
            InvalidUpdateError: Unknown field or invalid value
        """
        unknown = set(changes) - LayoutConfig.field_names()
        if unknown:
            raise InvalidUpdateError(f"Unknown config fields: {sorted(unknown)}")
        try:
            self.config = replace(self.config, **changes)
        except ValueError as e:
            raise InvalidUpdateError(str(e)) from e
        logger.debug(f"Config updated: {sorted(changes)}")
        return self.config

    def generate(self) -> GeneratedLayout:
        """
        Generate a fresh layout, replacing the current one.

        Raises:
            CapacityError: COUNTS mode with more elements than the grid holds
        """
        if self.mode is GenerationMode.COUNTS:
            self.check_capacity()
        self._layout = generate_layout(
            self.config,
            mode=self.mode,
            factory=self.factory,
            apply_aesthetics=self.apply_aesthetics,
        )
        return self._layout

    # ─────────────────────────────────────────────────────────────────────────
    # Element editing
    # ─────────────────────────────────────────────────────────────────────────

    def add_element(
        self,
        element_type: ElementType | str,
        page: int = 1,
        *,
        role: TextRole | str = TextRole.BODY,
    ) -> LayoutElement:
        """
        Add a text (3x2 cells) or image (2x2 cells) element at the first
        free slot of a page, on top of the page's existing elements.

        A full page places the element at (0, 0), overlapping others.
        """
        layout = self._require_layout()
        element_type = ElementType(element_type)
        self._check_page(page)

        span_w, span_h = (
            self.thresholds.image_span
            if element_type is ElementType.IMAGE
            else self.thresholds.text_span
        )
        geometry = GridGeometry.for_page(self.config, page)
        position = find_next_available_position(
            layout.elements, page, geometry.columns, geometry.rows, span_w, span_h,
            config=self.config,
        )
        element = self.factory.create_element(
            element_type,
            self.config,
            page,
            GridRect(position.grid_x, position.grid_y, span_w, span_h),
            role=TextRole.parse(role),
            priority=self.thresholds.default_priority,
        )
        layers = [e.layer for e in layout.elements_on_page(page)]
        element = replace(element, layer=max(layers) + 1 if layers else 0)
        self._layout = layout.with_elements((*layout.elements, element))
        logger.info(f"Added {element_type.value} {element.id} on page {page} at {position}")
        return element

    def update_element(self, element_id: str, **changes: Any) -> LayoutElement:
        """
        Patch an element.

        Raises:
            ElementNotFoundError: Unknown id
            ElementLockedError: Geometry change on a locked element
            InvalidUpdateError: Unknown/read-only field or invalid value
        """
        element = self._find(element_id)
        allowed = {f.name for f in fields(element)} - READ_ONLY_FIELDS
        unknown = set(changes) - allowed
        if unknown:
            raise InvalidUpdateError(
                f"Cannot update {sorted(unknown)} on {element.type.value} element {element_id}"
            )

        changed = {k for k, v in changes.items() if getattr(element, k) != v}
        locked_changes = changed & GEOMETRY_FIELDS
        if element.locked and locked_changes:
            raise ElementLockedError(element_id, locked_changes)

        if "page" in changes:
            self._check_page(changes["page"])
        if "role" in changes:
            changes["role"] = TextRole.parse(changes["role"])
        if "text_align" in changes:
            try:
                changes["text_align"] = TextAlign(changes["text_align"])
            except ValueError as e:
                raise InvalidUpdateError(str(e)) from e

        try:
            updated = replace(element, **changes)
        except ValueError as e:
            raise InvalidUpdateError(str(e)) from e

        if changed & SNAPPED_FIELDS:
            updated = self._regrid(updated)

        self._replace_element(updated)
        logger.debug(f"Updated {element_id}: {sorted(changes)}")
        return updated

    def _regrid(self, element: LayoutElement) -> LayoutElement:
        """Snap moved/resized geometry to cells, or drop the footprint."""
        if not self.config.snap_to_grid:
            return replace(element, grid=None)
        geometry = GridGeometry.for_page(self.config, element.page)
        rect = geometry.snap(element.x, element.y, element.width, element.height)
        x, y, width, height, rect = self.factory.absolute_geometry(
            self.config, element.page, rect, element.type
        )
        return replace(element, x=x, y=y, width=width, height=height, grid=rect)

    def delete_element(self, element_id: str) -> LayoutElement:
        """Remove an element and return it."""
        element = self._find(element_id)
        layout = self._require_layout()
        self._layout = layout.with_elements(e for e in layout.elements if e.id != element_id)
        logger.info(f"Deleted {element_id}")
        return element

    def move_layer(self, element_id: str, delta: int) -> LayoutElement:
        """Raise (delta > 0) or lower (delta < 0) an element; layers stay >= 0."""
        element = self._find(element_id)
        updated = replace(element, layer=max(0, element.layer + delta))
        self._replace_element(updated)
        return updated

    def apply_aesthetic_rule(self, page: int, rule: Optional[str] = None) -> list[LayoutElement]:
        """
        Re-apply an aesthetic rule (default config.aesthetic_rule) to the
        unlocked elements of one page.

        Returns:
            Elements whose footprint changed
        """
        layout = self._require_layout()
        self._check_page(page)
        rule = rule or self.config.aesthetic_rule
        geometry = GridGeometry.for_page(self.config, page)

        candidates = [e for e in layout.elements_on_page(page) if not e.locked]
        plans = []
        for element in candidates:
            rect = element_footprint(element, geometry)
            plans.append(ElementPlan(
                id=element.id,
                element_type=element.type,
                grid_x=rect.x,
                grid_y=rect.y,
                grid_width=rect.width,
                grid_height=rect.height,
                priority=element.priority,
                text_role=element.role if isinstance(element, TextElement) else None,
                page=page,
            ))

        adjusted = apply_rule_to_plans(plans, rule, geometry.columns, geometry.rows)
        changed: list[LayoutElement] = []
        for element, before, after in zip(candidates, plans, adjusted):
            if before.rect == after.rect:
                continue
            x, y, width, height, rect = self.factory.absolute_geometry(
                self.config, page, after.rect, element.type
            )
            updated = replace(element, x=x, y=y, width=width, height=height, grid=rect)
            self._replace_element(updated)
            changed.append(updated)
        logger.info(f"Applied {rule!r} to page {page}: {len(changed)} elements moved")
        return changed
