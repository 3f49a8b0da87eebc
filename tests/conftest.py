"""Shared fixtures for agentstudio tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty home directory, passed as ``home=`` to keep tests off the real one."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A directory to hold project trees, outside the fake home."""
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def project(workspace: Path) -> Path:
    """An empty project root (no markers yet)."""
    root = workspace / "app"
    root.mkdir()
    return root
