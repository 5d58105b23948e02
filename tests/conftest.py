"""Test configuration and fixtures for fstree."""

import pytest


@pytest.fixture
def sample_root(tmp_path):
    """Create root/ holding a.txt and sub/b.txt."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    return root
