"""Shared utility modules.

This package provides pure, stateless helpers for:
- Data size formatting (bytes to human-readable)
- Timestamp formatting
- Logging setup
"""

from sortud.utils.formatting import (
    SIZE_FIELD_WIDTH,
    format_raw_size,
    format_size,
    format_timestamp,
)
from sortud.utils.logging import configure_logging

__all__ = [
    # Formatting utilities
    "SIZE_FIELD_WIDTH",
    "format_raw_size",
    "format_size",
    "format_timestamp",
    # Logging
    "configure_logging",
]
