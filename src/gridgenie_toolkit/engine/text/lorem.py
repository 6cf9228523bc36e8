"""
Module: engine.text.lorem

Purpose:
    Placeholder text for body elements. The element factory only needs
    "about N words of text"; how the words are produced is behind the
    TextProvider interface.

Key Classes:
    - TextProvider: Abstract placeholder text source
    - LoremGenerator: Seedable lorem-ipsum generator
    - TextMetrics: Approximate capacity of a text box

Key Functions:
    - estimate_text_metrics(): Words that roughly fill a box

Used By:
    - engine.placement.factory: Body text content
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gridgenie_toolkit.common.thresholds import PLACEMENT_THRESHOLDS, PlacementThresholds

WORDS = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing",
    "elit", "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore",
    "et", "dolore", "magna", "aliqua", "enim", "ad", "minim", "veniam",
    "quis", "nostrud", "exercitation", "ullamco", "laboris", "nisi",
    "aliquip", "ex", "ea", "commodo", "consequat", "duis", "aute", "irure",
    "in", "reprehenderit", "voluptate", "velit", "esse", "cillum", "fugiat",
    "nulla", "pariatur", "excepteur", "sint", "occaecat", "cupidatat", "non",
    "proident", "sunt", "culpa", "qui", "officia", "deserunt", "mollit",
    "anim", "id", "est", "laborum",
)

WORDS_PER_PARAGRAPH = 50


@dataclass(frozen=True)
class TextMetrics:
    """
    Approximate capacity of a text box.

    Attributes:
        chars_per_line: Characters that fit on one line
        lines: Lines that fit in the box height
        words: Words that roughly fill the box
    """
    chars_per_line: int
    lines: int
    words: int


def estimate_text_metrics(
    width_mm: float,
    height_mm: float,
    font_size_pt: float,
    leading: float,
    thresholds: PlacementThresholds = PLACEMENT_THRESHOLDS,
) -> TextMetrics:
    """
    Estimate how much text fits in a box.

    Uses an average glyph width of avg_char_width_ratio x font size and an
    average word length of avg_word_length characters.

    Example:
        >>> estimate_text_metrics(60, 40, 11, 1.4).lines
        7
    """
    width_pt = width_mm * thresholds.pt_per_mm
    height_pt = height_mm * thresholds.pt_per_mm
    chars_per_line = math.floor(width_pt / (font_size_pt * thresholds.avg_char_width_ratio))
    lines = math.floor(height_pt / (font_size_pt * leading))
    words = math.floor(chars_per_line * lines / thresholds.avg_word_length)
    return TextMetrics(
        chars_per_line=max(thresholds.min_chars_per_line, chars_per_line),
        lines=max(1, lines),
        words=max(1, words),
    )


class TextProvider(ABC):
    """Source of placeholder body text."""

    @abstractmethod
    def body_text(self, word_count: int) -> str:
        """
        Text of roughly word_count words, as sentences and paragraphs.
        """


class LoremGenerator(TextProvider):
    """
    Lorem-ipsum placeholder text.

    Pass a seed (or a Random instance) for reproducible output.

    Example:
        >>> gen = LoremGenerator(seed=1)
        >>> len(gen.generate_text(3).split())
        3
    """

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random(seed)

    def generate_text(self, word_count: int) -> str:
        """Space-separated words with the first capitalized; no punctuation."""
        words = [self._rng.choice(WORDS) for _ in range(max(0, word_count))]
        if not words:
            return ""
        words[0] = words[0].capitalize()
        return " ".join(words)

    def generate_sentence(self, word_count: Optional[int] = None) -> str:
        if word_count is None:
            word_count = self._rng.randint(8, 17)
        return self.generate_text(word_count) + "."

    def generate_paragraph(self, word_count: int) -> str:
        """Sentences of 8-17 words totalling exactly word_count words."""
        sentences = []
        remaining = word_count
        while remaining > 0:
            length = min(remaining, self._rng.randint(8, 17))
            sentences.append(self.generate_sentence(length))
            remaining -= length
        return " ".join(sentences)

    def body_text(self, word_count: int) -> str:
        """
        Paragraphs of up to WORDS_PER_PARAGRAPH words, blank-line separated.
        """
        paragraphs = []
        remaining = max(1, word_count)
        while remaining > 0:
            length = min(remaining, WORDS_PER_PARAGRAPH)
            paragraphs.append(self.generate_paragraph(length))
            remaining -= length
        return "\n\n".join(paragraphs)
