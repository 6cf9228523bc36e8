"""Exceptions raised by the exporters."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExportError(Exception):
    """Export failed; path is the file or directory being written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
