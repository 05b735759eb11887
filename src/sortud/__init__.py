"""sortud - display sizes of files and directories.

This package walks a file or directory tree, annotates every entry with
its aggregate size and most recent modification time, and prints the tree
sorted by size.
"""

from sortud.__main__ import main

__all__ = ["main"]
