"""
Module: common.bindings

Purpose:
    Binding specifications used for spine width and print metadata.
    Unknown binding ids fall back to perfect binding.

Key Functions:
    - get_binding_spec(): Resolve a binding id (accepts UI aliases)
    - spine_width(): Spine thickness in mm for a page count and paper weight

Used By:
    - engine.generation.generator: Layout metadata
    - output.renderer: Document info
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingSpec:
    """
    Physical binding parameters (mm).

    Attributes:
        id: Canonical binding id
        label: Display name
        spine: Callable (pages, gsm) -> spine width in mm
        cover_overhang: Cover overhang beyond the block
        spine_margin: Extra inner margin needed near the spine
        bleed_requirement: Minimum bleed
        fold_allowance: Allowance at the fold
        safety_margin: Safe zone inside trim
    """
    id: str
    label: str
    spine: Callable[[int, float], float]
    cover_overhang: float
    spine_margin: float
    bleed_requirement: float
    fold_allowance: float
    safety_margin: float


BINDINGS: dict[str, BindingSpec] = {
    "perfect": BindingSpec(
        "perfect", "Perfect Bound",
        lambda pages, gsm: max(pages * gsm * 0.8 / 1000, 3),
        cover_overhang=3, spine_margin=4, bleed_requirement=3,
        fold_allowance=0, safety_margin=2,
    ),
    "saddle": BindingSpec(
        "saddle", "Saddle Stitch",
        lambda pages, gsm: max(pages * gsm * 0.4 / 1000, 1.5),
        cover_overhang=0, spine_margin=6, bleed_requirement=3,
        fold_allowance=2, safety_margin=3,
    ),
    "spiral": BindingSpec(
        "spiral", "Spiral Bound",
        lambda pages, gsm: 12,
        cover_overhang=0, spine_margin=15, bleed_requirement=3,
        fold_allowance=0, safety_margin=5,
    ),
    "casebound": BindingSpec(
        "casebound", "Case Bound",
        lambda pages, gsm: max(pages * gsm * 0.9 / 1000 + 6, 8),
        cover_overhang=6, spine_margin=5, bleed_requirement=6,
        fold_allowance=3, safety_margin=3,
    ),
    "wire-o": BindingSpec(
        "wire-o", "Wire-O",
        lambda pages, gsm: 8,
        cover_overhang=0, spine_margin=12, bleed_requirement=3,
        fold_allowance=0, safety_margin=4,
    ),
    "comb": BindingSpec(
        "comb", "Comb Bound",
        lambda pages, gsm: 10,
        cover_overhang=0, spine_margin=12, bleed_requirement=3,
        fold_allowance=0, safety_margin=4,
    ),
}

DEFAULT_BINDING = "perfect"

# Ids used by the workspace rulers
_ALIASES = {
    "perfect-bound": "perfect",
    "saddle-stitched": "saddle",
    "spiral-bound": "spiral",
    "case-bound": "casebound",
}


def get_binding_spec(binding_id: str) -> BindingSpec:
    """
    Resolve a binding id, accepting workspace aliases.

    Example:
        >>> get_binding_spec("saddle-stitched").id
        'saddle'
        >>> get_binding_spec("glued").id
        'perfect'
    """
    key = _ALIASES.get(binding_id, binding_id)
    spec = BINDINGS.get(key)
    if spec is None:
        logger.warning(f"Unknown binding type {binding_id!r}, using {DEFAULT_BINDING}")
        return BINDINGS[DEFAULT_BINDING]
    return spec


def spine_width(binding_id: str, pages: int, gsm: float) -> float:
    """Spine width in mm, rounded to 0.1mm."""
    return round(get_binding_spec(binding_id).spine(pages, gsm), 1)
