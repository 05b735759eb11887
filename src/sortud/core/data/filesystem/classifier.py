"""Classification of filesystem metadata into node kinds."""

from __future__ import annotations

import os
import stat

from sortud.types.models import NodeKind


def classify(st: os.stat_result) -> NodeKind:
    """Map a stat result to the kind of node it describes.

    A link is only ever seen here when metadata was looked up without
    following links. Fifos, sockets and device files count as files.

    Args:
        st: Result of ``os.stat`` or ``os.lstat``

    Returns:
        NodeKind for the entry
    """
    if stat.S_ISLNK(st.st_mode):
        return NodeKind.SYMLINK
    if stat.S_ISDIR(st.st_mode):
        return NodeKind.DIRECTORY
    return NodeKind.FILE


def is_hidden(path: str) -> bool:
    """Check whether the last component of ``path`` starts with a dot.

    ``.`` and ``..`` are directory markers, not hidden entries.
    """
    name = os.path.basename(os.path.normpath(path))
    return name.startswith(".") and name not in (os.curdir, os.pardir)
