"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw
sizes and timestamps into the fields printed by the renderer. All
functions are pure with no side effects.
"""

from datetime import UTC, datetime
from typing import Final

from sortud.types.models import UnitBase

# Width of the numeric part of a humanized size ("1023.999" is 8 wide)
SIZE_FIELD_WIDTH: Final[int] = 8

TIMESTAMP_FORMAT: Final[str] = "%Y %b %d %H:%M:%S"

_BINARY_PREFIXES: Final[tuple[str, ...]] = ("", "K", "M", "G", "T")
_DECIMAL_PREFIXES: Final[tuple[str, ...]] = ("", "k", "M", "G", "T")


def format_size(size: int, unit_base: UnitBase = UnitBase.BINARY) -> str:
    """Convert a byte count to a human-readable size.

    The value is divided by the unit base while it strictly exceeds the
    base, so a value exactly equal to the base keeps its current unit.
    Prefixes stop at terabytes regardless of magnitude.

    Args:
        size: Number of bytes to format (must be non-negative)
        unit_base: 1024 for binary units, 1000 for SI units

    Returns:
        Right-justified value with three decimals and a unit suffix

    Examples:
        >>> format_size(500)
        ' 500.000 B'
        >>> format_size(1024)
        '1024.000 B'
        >>> format_size(1025)
        '   1.001 KB'
        >>> format_size(1500, UnitBase.DECIMAL)
        '   1.500 kB'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    prefixes = _DECIMAL_PREFIXES if unit_base is UnitBase.DECIMAL else _BINARY_PREFIXES
    base = float(unit_base.value)

    value = float(size)
    index = 0
    while value > base and index < len(prefixes) - 1:
        value /= base
        index += 1

    return f"{value:>{SIZE_FIELD_WIDTH}.3f} {prefixes[index]}B"


def format_raw_size(size: int, width: int) -> str:
    """Right-justify a raw byte count to ``width`` characters."""
    return f"{size:>{width}}"


def format_timestamp(moment: datetime, *, local_time: bool = False) -> str:
    """Format a modification time as ``YYYY Mon DD HH:MM:SS``.

    Timestamps are shown in UTC unless ``local_time`` is set.

    Args:
        moment: Timezone-aware timestamp
        local_time: Render in the local timezone instead of UTC

    Returns:
        Formatted timestamp string

    Examples:
        >>> format_timestamp(datetime(2024, 3, 5, 7, 8, 9, tzinfo=UTC))
        '2024 Mar 05 07:08:09'
    """
    moment = moment.astimezone() if local_time else moment.astimezone(UTC)
    return moment.strftime(TIMESTAMP_FORMAT)
