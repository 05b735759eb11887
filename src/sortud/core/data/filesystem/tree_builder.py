"""Tree builder aggregating sizes and modification times over a walk.

The walk is driven by an explicit stack of directory frames rather than
interpreter recursion, so arbitrarily deep trees cannot exhaust the Python
call stack. Each node is created once, after all of its children have been
built, and is never mutated afterwards.

Failure policy:
- A path whose metadata cannot be looked up (permission denied, dangling
  link, path too long) is omitted from its parent.
- A directory whose listing cannot be read is kept, marked inaccessible,
  and sized by its own metadata only.
- Any other metadata failure is fatal for the whole walk.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass, field
from datetime import UTC, datetime
from operator import attrgetter
from typing import Final

from sortud.core.data.filesystem.classifier import classify
from sortud.exceptions import TreeBuildError
from sortud.types.models import EPOCH, BuildOutcome, BuildStatus, Node, NodeKind

logger = logging.getLogger(__name__)

# Lookup failures that drop a single entry instead of aborting the walk
OMITTABLE_ERRNOS: Final[frozenset[int]] = frozenset(
    {
        errno.EACCES,
        errno.EPERM,
        errno.ENOENT,
        errno.ENOTDIR,
        errno.ELOOP,
        errno.ENAMETOOLONG,
    }
)


@dataclass(slots=True)
class _DirectoryFrame:
    """Directory whose children are still being built."""

    path: str
    depth: int
    via_symlink: bool
    own_size: int
    pending: list[str]
    children: list[Node] = field(default_factory=list)
    total_size: int = 0
    latest: datetime = EPOCH

    def add(self, node: Node) -> None:
        self.children.append(node)
        self.total_size += node.size
        if node.modified > self.latest:
            self.latest = node.modified

    def finish(self, *, ascending: bool) -> Node:
        # sorted() is stable in both directions, ties keep listing order
        ordered = sorted(self.children, key=attrgetter("size"), reverse=not ascending)
        return Node(
            path=self.path,
            depth=self.depth,
            kind=NodeKind.DIRECTORY,
            size=self.own_size + self.total_size,
            modified=self.latest,
            own_size=self.own_size,
            children=tuple(ordered),
            via_symlink=self.via_symlink,
        )


class TreeBuilder:
    """Builder for the annotated size tree of a file or directory.

    Provides a full walk with:
    - Size aggregation from children that could be built
    - Most recent modification time across all descendants
    - Stable size ordering of each directory's children
    - Sticky symlink provenance for everything reached through a link
    - Optional non-following metadata lookups that drop symlinks
    """

    def __init__(self, *, ascending: bool = False, skip_symlinks: bool = False) -> None:
        """Initialize the tree builder.

        Args:
            ascending: Sort children smallest first instead of largest first
            skip_symlinks: Look up metadata without following links, which
                drops symlinks from the result
        """
        self.ascending: bool = ascending
        self.skip_symlinks: bool = skip_symlinks

    def build(self, path: str | os.PathLike[str]) -> Node | None:
        """Build the tree rooted at ``path``.

        Args:
            path: Root file or directory

        Returns:
            Root node, or None if the root itself cannot be looked up

        Raises:
            TreeBuildError: If the walk hits an unrecoverable metadata failure
        """
        outcome = self.build_outcome(os.fspath(path))

        if outcome.status is BuildStatus.FATAL:
            raise TreeBuildError(outcome.path, outcome.reason or "unknown failure")

        if outcome.status is BuildStatus.OMITTED:
            logger.info(
                "Root could not be accessed",
                extra={"entry": outcome.path, "reason": outcome.reason},
            )
            return None

        root = outcome.node
        if root is not None:
            logger.info(
                "Walk finished",
                extra={"entry": root.path, "size": root.size},
            )
        return root

    def build_outcome(
        self,
        path: str,
        depth: int = 1,
        parent_via_symlink: bool = False,
    ) -> BuildOutcome:
        """Build the subtree at ``path`` and report how it went.

        Filesystem failures never raise from here; they are folded into the
        returned outcome. A fatal outcome anywhere below ``path`` becomes
        the outcome of the whole call.

        Args:
            path: Entry to build
            depth: Depth of ``path`` relative to the walk root (1-based)
            parent_via_symlink: Whether the walk already crossed a symlink

        Returns:
            BUILT with the node, OMITTED, or FATAL with a reason
        """
        visited = self._visit(path, depth, parent_via_symlink)
        if not isinstance(visited, _DirectoryFrame):
            return visited

        stack: list[_DirectoryFrame] = [visited]
        while stack:
            frame = stack[-1]

            if not frame.pending:
                _ = stack.pop()
                node = frame.finish(ascending=self.ascending)
                if not stack:
                    return BuildOutcome.built(node)
                stack[-1].add(node)
                continue

            child_path = frame.pending.pop()
            child = self._visit(child_path, frame.depth + 1, frame.via_symlink)

            if isinstance(child, _DirectoryFrame):
                stack.append(child)
            elif child.status is BuildStatus.BUILT and child.node is not None:
                frame.add(child.node)
            elif child.status is BuildStatus.FATAL:
                return child

        # Unreachable: the loop returns when the first frame finishes
        return BuildOutcome.fatal(path, "walk ended without a result")

    def _visit(
        self,
        path: str,
        depth: int,
        parent_via_symlink: bool,
    ) -> BuildOutcome | _DirectoryFrame:
        """Look up one entry and either finish it or open a frame for it."""
        try:
            st = os.lstat(path) if self.skip_symlinks else os.stat(path)
        except OSError as exc:
            if exc.errno in OMITTABLE_ERRNOS:
                logger.debug(
                    "Omitting entry",
                    extra={"entry": path, "reason": exc.strerror},
                )
                return BuildOutcome.omitted(path, exc.strerror or str(exc))
            return BuildOutcome.fatal(path, f"metadata lookup failed: {exc}")

        kind = classify(st)
        if kind is NodeKind.SYMLINK:
            logger.debug("Omitting symlink", extra={"entry": path})
            return BuildOutcome.omitted(path, "symlink skipped")

        via_symlink = parent_via_symlink or os.path.islink(path)

        if kind is NodeKind.FILE:
            try:
                modified = datetime.fromtimestamp(st.st_mtime, tz=UTC)
            except (OverflowError, OSError, ValueError) as exc:
                return BuildOutcome.fatal(path, f"modification time unavailable: {exc}")
            return BuildOutcome.built(
                Node(
                    path=path,
                    depth=depth,
                    kind=NodeKind.FILE,
                    size=st.st_size,
                    modified=modified,
                    own_size=st.st_size,
                    via_symlink=via_symlink,
                )
            )

        try:
            with os.scandir(path) as entries:
                child_paths = [entry.path for entry in entries]
        except OSError as exc:
            logger.warning(
                "Could not read directory contents",
                extra={"entry": path, "reason": exc.strerror or str(exc)},
            )
            return BuildOutcome.built(
                Node(
                    path=path,
                    depth=depth,
                    kind=NodeKind.DIRECTORY,
                    size=st.st_size,
                    modified=EPOCH,
                    own_size=st.st_size,
                    children=(),
                    accessible=False,
                    via_symlink=via_symlink,
                )
            )

        # Frames pop from the end, so reverse to build in listing order
        child_paths.reverse()
        return _DirectoryFrame(
            path=path,
            depth=depth,
            via_symlink=via_symlink,
            own_size=st.st_size,
            pending=child_paths,
        )
