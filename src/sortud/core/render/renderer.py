"""Depth-limited pretty-printer for size trees."""

from __future__ import annotations

import os
import sys
from typing import Final, TextIO

from sortud.core.data.filesystem.classifier import is_hidden
from sortud.core.render.styling import ColorClass, color_class, style
from sortud.types.models import Node, UnitBase
from sortud.utils.formatting import format_raw_size, format_size, format_timestamp

INACCESSIBLE_NOTE: Final[str] = "[could not access contents]"

_CURDIR_PREFIX: Final[str] = os.curdir + os.sep


def display_path(path: str) -> str:
    """Return the path as shown in the listing.

    Paths starting with the current-directory component are shown
    relative to the working directory; anything else is shown as given.
    Bytes that do not decode in the filesystem encoding are shown as
    backslash escapes.

    Examples:
        >>> display_path("./src/app.py")
        'src/app.py'
        >>> display_path(".")
        '.'
        >>> display_path("/tmp/x")
        '/tmp/x'
    """
    stripped = path
    while stripped.startswith(_CURDIR_PREFIX):
        stripped = stripped[len(_CURDIR_PREFIX) :].lstrip(os.sep)
    return printable_path(stripped or os.curdir)


def printable_path(path: str) -> str:
    """Replace undecodable filename bytes with backslash escapes."""
    return os.fsencode(path).decode(sys.getfilesystemencoding(), "backslashreplace")


class TreeRenderer:
    """Render a size tree as one styled line per node.

    Nodes are written depth-first in stored child order. Nodes deeper than
    ``max_depth`` are never written; the walk does not descend past it.
    """

    def __init__(
        self,
        *,
        humanize: bool = False,
        unit_base: UnitBase = UnitBase.BINARY,
        show_time: bool = False,
        max_depth: int | None = None,
        color: bool = True,
        indent: int = 2,
        local_time: bool = False,
        out: TextIO | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            humanize: Print sizes with unit prefixes instead of raw bytes
            unit_base: Unit base used when humanizing
            show_time: Include the modification time field
            max_depth: Deepest node depth to print (None for unlimited)
            color: Wrap lines in ANSI color escapes
            indent: Spaces of indentation per depth level
            local_time: Print timestamps in local time instead of UTC
            out: Output sink (default: standard output)
        """
        self.humanize: bool = humanize
        self.unit_base: UnitBase = unit_base
        self.show_time: bool = show_time
        self.max_depth: int | None = max_depth
        self.color: bool = color
        self.indent: int = indent
        self.local_time: bool = local_time
        self.out: TextIO = out if out is not None else sys.stdout

    def render(self, root: Node) -> None:
        """Write the tree rooted at ``root`` to the output sink."""
        width = len(str(root.size))

        stack: list[Node] = [root]
        while stack:
            node = stack.pop()
            if self._too_deep(node.depth):
                continue

            _ = self.out.write(self.format_line(node, width) + "\n")
            if not node.accessible:
                _ = self.out.write(self.format_note(node) + "\n")

            if node.is_directory and node.children and not self._too_deep(node.depth + 1):
                stack.extend(reversed(node.children))

    def format_line(self, node: Node, width: int) -> str:
        """Format the line for a single node.

        Args:
            node: Node to format
            width: Width of the raw size column

        Returns:
            Styled, indented line without a trailing newline
        """
        if self.humanize:
            size_field = format_size(node.size, self.unit_base)
        else:
            size_field = format_raw_size(node.size, width)

        fields = [size_field]
        if self.show_time:
            fields.append(format_timestamp(node.modified, local_time=self.local_time))
        fields.append(display_path(node.path))

        text = "  ".join(fields)
        color = color_class(node.display_kind, is_hidden(node.path))
        return self._pad(node.depth) + style(text, color, enabled=self.color)

    def format_note(self, node: Node) -> str:
        """Format the annotation line written under an inaccessible directory."""
        return self._pad(node.depth + 1) + style(INACCESSIBLE_NOTE, ColorClass.ERROR, enabled=self.color)

    def _pad(self, depth: int) -> str:
        return " " * (self.indent * (depth - 1))

    def _too_deep(self, depth: int) -> bool:
        return self.max_depth is not None and depth > self.max_depth
