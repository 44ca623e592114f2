"""Shared pytest fixtures for freshen tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty working directory for one test."""
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def tracked_file(workspace: Path) -> Path:
    """A tracked input file containing ``hello``."""
    path = workspace / "a.txt"
    path.write_text("hello", encoding="utf-8")
    return path


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore root logger handlers and level after tests that reconfigure logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
