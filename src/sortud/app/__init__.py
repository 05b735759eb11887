"""Application module for sortud."""

from __future__ import annotations

from sortud.app.cli import cli

__all__ = [
    "cli",
]
