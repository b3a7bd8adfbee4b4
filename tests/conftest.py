"""Shared fixtures for audioshelf tests.

Builders live in ``tests.helpers``; fixtures here write project files
under ``tmp_path`` and reset the package logger between tests.
"""

from __future__ import annotations

import gzip
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write a gzip-compressed ``.als`` project under ``tmp_path/projects``."""

    def _write(name: str, document: str, compress: bool = True) -> Path:
        path = tmp_path / "projects" / f"{name}.als"
        path.parent.mkdir(parents=True, exist_ok=True)
        data = document.encode("utf-8")
        path.write_bytes(gzip.compress(data) if compress else data)
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records in every test."""
    yield
    logger = logging.getLogger("audioshelf")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
