"""
Module: engine.placement.aesthetics

Purpose:
    Optional post-processing over planned elements: pull high-priority
    plans toward golden-ratio or rule-of-thirds focal points, or rescale
    spans along the Fibonacci sequence.

Key Functions:
    - apply_aesthetic_rule(): Apply one rule to a list of plans (pure)
    - fibonacci(): 1-based Fibonacci numbers (1, 1, 2, 3, 5, ...)

Key Classes:
    - AestheticRule: Supported rule names

Rules replace positions/spans of affected plans; they do not compose and
do not check for overlaps. Several high-priority plans may converge on the
same focal point.

Used By:
    - engine.generation.generator: apply_aesthetics=True
    - engine.session: Re-applying a rule to one page
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Sequence

from gridgenie_toolkit.common.thresholds import AESTHETIC_THRESHOLDS, AestheticThresholds
from gridgenie_toolkit.core.models import ElementPlan

logger = logging.getLogger(__name__)


class AestheticRule(str, Enum):
    GOLDEN_RATIO = "golden-ratio"
    RULE_OF_THIRDS = "rule-of-thirds"
    FIBONACCI = "fibonacci"

    @classmethod
    def parse(cls, value: "str | AestheticRule | None") -> Optional["AestheticRule"]:
        """Rule for a name, or None for empty/unknown names."""
        if value is None or isinstance(value, AestheticRule):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def fibonacci(n: int) -> int:
    """
    n-th Fibonacci number, 1-based: fibonacci(1) == fibonacci(2) == 1.

    Non-positive n returns 1.
    """
    a, b = 1, 1
    for _ in range(max(0, n - 2)):
        a, b = b, a + b
    return b if n > 1 else a


def _clamp(value: int, span: int, limit: int) -> int:
    return max(0, min(value, limit - span))


def _golden_ratio(
    plans: Sequence[ElementPlan], columns: int, rows: int, t: AestheticThresholds
) -> list[ElementPlan]:
    focal_x = int(columns * t.golden_ratio)
    focal_y = int(rows * t.golden_ratio)
    result = []
    for plan in plans:
        if plan.priority >= t.high_priority:
            plan = plan.moved_to(
                _clamp(focal_x, plan.grid_width, columns),
                _clamp(focal_y, plan.grid_height, rows),
            )
        result.append(plan)
    return result


def _rule_of_thirds(
    plans: Sequence[ElementPlan], columns: int, rows: int, t: AestheticThresholds
) -> list[ElementPlan]:
    points = (
        (int(columns / 3), int(rows / 3)),
        (int(2 * columns / 3), int(2 * rows / 3)),
    )
    result = []
    for index, plan in enumerate(plans):
        if plan.priority >= t.high_priority:
            x, y = points[index % 2]
            plan = plan.moved_to(
                _clamp(x, plan.grid_width, columns),
                _clamp(y, plan.grid_height, rows),
            )
        result.append(plan)
    return result


def _fibonacci(
    plans: Sequence[ElementPlan], columns: int, rows: int, t: AestheticThresholds
) -> list[ElementPlan]:
    result = []
    for index, plan in enumerate(plans):
        fib = fibonacci(index + 1)
        width = min(fib, columns, plan.grid_width)
        height = min(math.ceil(fib * t.golden_ratio), rows, plan.grid_height)
        result.append(plan.resized_to(max(1, width), max(1, height)))
    return result


_RULES = {
    AestheticRule.GOLDEN_RATIO: _golden_ratio,
    AestheticRule.RULE_OF_THIRDS: _rule_of_thirds,
    AestheticRule.FIBONACCI: _fibonacci,
}


def apply_aesthetic_rule(
    elements: Sequence[ElementPlan],
    rule: "str | AestheticRule | None",
    grid_columns: int,
    grid_rows: int,
    thresholds: AestheticThresholds = AESTHETIC_THRESHOLDS,
) -> list[ElementPlan]:
    """
    Apply an aesthetic rule to planned elements.

    The input is not modified; a new list is returned in the same order.
    Unknown or empty rule names return the plans unchanged.

    Args:
        elements: Plans for one page (or spread)
        rule: "golden-ratio", "rule-of-thirds" or "fibonacci"
        grid_columns / grid_rows: Grid the plans live on
        thresholds: Ratio and priority cut-off

    Returns:
        Adjusted plans

    Example:
        >>> plan = ElementPlan("a", ElementType.IMAGE, 0, 0, 2, 2, priority=8)
        >>> apply_aesthetic_rule([plan], "golden-ratio", 6, 8)[0].rect
        GridRect(x=3, y=4, width=2, height=2)
    """
    parsed = AestheticRule.parse(rule)
    if parsed is None:
        if rule:
            logger.debug(f"Unknown aesthetic rule {rule!r}, plans left unchanged")
        return list(elements)
    return _RULES[parsed](elements, grid_columns, grid_rows, thresholds)
