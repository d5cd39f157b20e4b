"""Pytest fixtures and test utilities."""

from pathlib import Path

import pytest

from dupetree.utils.config import reset_config


def write_file(path: Path, content: bytes) -> Path:
    """Write content to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config at an empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    reset_config()
    yield home
    reset_config()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A working directory holding empty target/ and context/ trees."""
    root = tmp_path / "work"
    (root / "target").mkdir(parents=True)
    (root / "context").mkdir()
    monkeypatch.chdir(root)
    return root.resolve()


@pytest.fixture
def simple_trees(workspace):
    """Target holds A; context holds a copy of A (B) and an unrelated file (C)."""
    a = write_file(workspace / "target" / "a.txt", b"x" * 10)
    b = write_file(workspace / "context" / "b.txt", b"x" * 10)
    c = write_file(workspace / "context" / "c.txt", b"y" * 10)
    return workspace, a, b, c
