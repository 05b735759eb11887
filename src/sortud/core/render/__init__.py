"""Rendering of size trees to text."""

from __future__ import annotations

from .renderer import INACCESSIBLE_NOTE, TreeRenderer, display_path
from .styling import COLOR_CODES, ColorClass, color_class, style

__all__ = [
    "COLOR_CODES",
    "INACCESSIBLE_NOTE",
    "ColorClass",
    "TreeRenderer",
    "color_class",
    "display_path",
    "style",
]
