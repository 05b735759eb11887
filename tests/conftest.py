"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from sortud.utils.logging import PACKAGE_LOGGER
from tests.fixtures.filesystem import BASE_MTIME, write_file


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Provide the ``write_file`` helper to tests."""
    return write_file


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small tree with files of distinct sizes and known mtimes.

    Layout::

        root/
            big.bin      3000 bytes
            small.txt     100 bytes
            .hidden        10 bytes
            sub/
                f        1000 bytes (newest file in the tree)
                empty/
    """
    root = tmp_path / "root"
    _ = write_file(root / "big.bin", 3000, BASE_MTIME)
    _ = write_file(root / "small.txt", 100, BASE_MTIME + 10)
    _ = write_file(root / ".hidden", 10, BASE_MTIME + 20)
    _ = write_file(root / "sub" / "f", 1000, BASE_MTIME + 500)
    (root / "sub" / "empty").mkdir()
    return root


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers and level left behind by ``configure_logging``."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
