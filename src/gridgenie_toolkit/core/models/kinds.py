"""
Module: core.models.kinds

Purpose:
    Enumerations shared by plans and elements.

Key Classes:
    - ElementType: text or image
    - TextRole: heading, subheading, body, caption
    - TextAlign: horizontal text alignment
"""

from __future__ import annotations

from enum import Enum


class ElementType(str, Enum):
    """Kind of layout element."""

    TEXT = "text"
    IMAGE = "image"


class TextRole(str, Enum):
    """
    Typographic role of a text element.

    Legacy role names from saved layouts ("title", "headline", "subtitle",
    "subhead") are accepted by parse().
    """

    HEADING = "heading"
    SUBHEADING = "subheading"
    BODY = "body"
    CAPTION = "caption"

    @classmethod
    def parse(cls, value: "str | TextRole") -> "TextRole":
        """
        Parse a role name, defaulting to BODY for unknown values.

        Example:
            >>> TextRole.parse("headline")
            <TextRole.HEADING: 'heading'>
        """
        if isinstance(value, TextRole):
            return value
        key = str(value).strip().lower()
        return _ROLE_ALIASES.get(key, cls.BODY)


_ROLE_ALIASES = {
    "heading": TextRole.HEADING,
    "title": TextRole.HEADING,
    "headline": TextRole.HEADING,
    "subheading": TextRole.SUBHEADING,
    "subtitle": TextRole.SUBHEADING,
    "subhead": TextRole.SUBHEADING,
    "body": TextRole.BODY,
    "caption": TextRole.CAPTION,
}


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"
