"""Placeholder text generation."""

from .lorem import (
    LoremGenerator,
    TextMetrics,
    TextProvider,
    estimate_text_metrics,
)

__all__ = [
    "LoremGenerator",
    "TextMetrics",
    "TextProvider",
    "estimate_text_metrics",
]
