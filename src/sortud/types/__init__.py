"""Type definitions for sortud.

This package provides the immutable tree node model and the tagged
build outcome returned by the tree builder.
"""

from sortud.types.models import (
    EPOCH,
    BuildOutcome,
    BuildStatus,
    Node,
    NodeKind,
    UnitBase,
)

__all__ = [
    "EPOCH",
    "BuildOutcome",
    "BuildStatus",
    "Node",
    "NodeKind",
    "UnitBase",
]
