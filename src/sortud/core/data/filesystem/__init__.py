"""Filesystem module for walking trees and aggregating sizes."""

from __future__ import annotations

from .classifier import classify, is_hidden
from .tree_builder import TreeBuilder

__all__ = [
    "TreeBuilder",
    "classify",
    "is_hidden",
]
