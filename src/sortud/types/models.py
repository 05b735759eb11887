"""Data models for sortud.

This module defines the immutable dataclasses produced by the tree builder
and consumed by the renderer.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Final, Self

# Modification time reported for directories with no built children
EPOCH: Final[datetime] = datetime.fromtimestamp(0, tz=UTC)


class NodeKind(str, Enum):
    """Kind of filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class UnitBase(int, Enum):
    """Divisor used when humanizing byte counts."""

    BINARY = 1024
    DECIMAL = 1000


@dataclass(slots=True, frozen=True)
class Node:
    """One aggregated filesystem entry in the result tree.

    Directories carry the sum of their own metadata length and the sizes of
    all children that could be built, and the most recent modification time
    found among them. Files and symlinks never have children.
    """

    path: str
    depth: int
    kind: NodeKind
    size: int
    modified: datetime
    own_size: int
    children: tuple["Node", ...] | None = None
    accessible: bool = True
    via_symlink: bool = False

    @property
    def display_kind(self) -> NodeKind:
        """Kind used for presentation.

        Everything reached through a symlink is shown as a symlink,
        whatever its real kind.
        """
        if self.via_symlink:
            return NodeKind.SYMLINK
        return self.kind

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


class BuildStatus(str, Enum):
    """Outcome of building a single entry."""

    BUILT = "built"
    OMITTED = "omitted"  # metadata lookup failed, entry dropped
    FATAL = "fatal"  # unrecoverable, aborts the whole walk


@dataclass(slots=True, frozen=True)
class BuildOutcome:
    """Tagged result of building one entry of the tree."""

    status: BuildStatus
    path: str
    node: Node | None = None
    reason: str | None = None

    @classmethod
    def built(cls, node: Node) -> Self:
        return cls(status=BuildStatus.BUILT, path=node.path, node=node)

    @classmethod
    def omitted(cls, path: str, reason: str) -> Self:
        return cls(status=BuildStatus.OMITTED, path=path, reason=reason)

    @classmethod
    def fatal(cls, path: str, reason: str) -> Self:
        return cls(status=BuildStatus.FATAL, path=path, reason=reason)
