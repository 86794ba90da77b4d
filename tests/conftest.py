"""Shared fixtures for homescope tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from homescope.config import canonical_root


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A small root: ``notes.md``, hidden ``.secret`` and ``sub/deep.txt``."""
    root = canonical_root(tmp_path / "home")
    root.mkdir()
    (root / "notes.md").write_text("0123456789")
    (root / ".secret").write_text("12345")
    sub = root / "sub"
    sub.mkdir()
    (sub / "deep.txt").write_text("you can findme here")
    return root
