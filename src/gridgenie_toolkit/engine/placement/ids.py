"""
Module: engine.placement.ids

Purpose:
    Id generation for elements and layouts behind an injectable interface,
    so tests can assert exact ids.

Key Classes:
    - IdProvider: Abstract id source
    - TimestampIdProvider: "{type}-{ms}-{suffix}" ids (default)
    - SequentialIdProvider: Deterministic counter-based ids

Used By:
    - engine.placement.factory: Element ids
    - engine.generation.generator: Layout ids
"""

from __future__ import annotations

import itertools
import random
import string
import time
from abc import ABC, abstractmethod
from typing import Optional

_BASE36 = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9


class IdProvider(ABC):
    """Source of element and layout ids."""

    @abstractmethod
    def element_id(self, element_type: str) -> str:
        """
        New id for an element of the given type ("text" or "image").
        """

    @abstractmethod
    def layout_id(self) -> str:
        """New id for a generated layout."""


class TimestampIdProvider(IdProvider):
    """
    Millisecond timestamp plus a random base-36 suffix.

    Uniqueness is probabilistic: two ids collide only if they share the
    same millisecond and the same 9-character suffix.

    Example:
        >>> TimestampIdProvider().element_id("text")
        'text-1760000000000-k3j9x0a1b'
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def _suffix(self) -> str:
        return "".join(self._rng.choice(_BASE36) for _ in range(SUFFIX_LENGTH))

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)

    def element_id(self, element_type: str) -> str:
        return f"{element_type}-{self._now_ms()}-{self._suffix()}"

    def layout_id(self) -> str:
        return f"layout-{self._now_ms()}"


class SequentialIdProvider(IdProvider):
    """
    Deterministic ids from a shared counter.

    Example:
        >>> ids = SequentialIdProvider()
        >>> ids.element_id("text"), ids.element_id("image"), ids.layout_id()
        ('text-1', 'image-2', 'layout-3')
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def element_id(self, element_type: str) -> str:
        return f"{element_type}-{next(self._counter)}"

    def layout_id(self) -> str:
        return f"layout-{next(self._counter)}"
