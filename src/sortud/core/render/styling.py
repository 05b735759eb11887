"""ANSI 256-color styling for rendered lines.

Each line is colored by the displayed kind of its node and whether the
node is hidden, giving six color classes.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Final

from sortud.types.models import NodeKind

RESET: Final[str] = "\x1b[0m"


class ColorClass(str, Enum):
    """Color classes applied to rendered lines."""

    FILE = "file"
    HIDDEN_FILE = "hidden_file"
    DIRECTORY = "directory"
    HIDDEN_DIRECTORY = "hidden_directory"
    SYMLINK = "symlink"
    HIDDEN_SYMLINK = "hidden_symlink"
    ERROR = "error"


# 256-color palette indices
COLOR_CODES: Final[Mapping[ColorClass, int]] = {
    ColorClass.FILE: 252,
    ColorClass.HIDDEN_FILE: 244,
    ColorClass.DIRECTORY: 39,
    ColorClass.HIDDEN_DIRECTORY: 25,
    ColorClass.SYMLINK: 120,
    ColorClass.HIDDEN_SYMLINK: 65,
    ColorClass.ERROR: 203,
}

_CLASSES: Final[Mapping[tuple[NodeKind, bool], ColorClass]] = {
    (NodeKind.FILE, False): ColorClass.FILE,
    (NodeKind.FILE, True): ColorClass.HIDDEN_FILE,
    (NodeKind.DIRECTORY, False): ColorClass.DIRECTORY,
    (NodeKind.DIRECTORY, True): ColorClass.HIDDEN_DIRECTORY,
    (NodeKind.SYMLINK, False): ColorClass.SYMLINK,
    (NodeKind.SYMLINK, True): ColorClass.HIDDEN_SYMLINK,
}


def color_class(kind: NodeKind, hidden: bool) -> ColorClass:
    """Select the color class for a node kind and hidden flag."""
    return _CLASSES[(kind, hidden)]


def style(text: str, color: ColorClass, *, enabled: bool = True) -> str:
    """Wrap ``text`` in a 256-color foreground escape.

    Args:
        text: Text to style
        color: Color class to apply
        enabled: Return ``text`` untouched when False

    Returns:
        Styled text

    Examples:
        >>> style("a.txt", ColorClass.FILE)
        '\\x1b[38;5;252ma.txt\\x1b[0m'
        >>> style("a.txt", ColorClass.FILE, enabled=False)
        'a.txt'
    """
    if not enabled:
        return text
    return f"\x1b[38;5;{COLOR_CODES[color]}m{text}{RESET}"
