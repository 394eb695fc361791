"""Shared fixtures for postcache tests."""

from __future__ import annotations

from pathlib import Path

import pytest


def write_post(directory: Path, name: str, title: str) -> Path:
    path = directory / name
    path.write_text(f"<html><body><h1>{title}</h1><p>{title} body</p></body></html>", encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    """Directory holding a.html ("One") and b.html ("Two")."""
    directory = tmp_path / "posts"
    directory.mkdir()
    write_post(directory, "a.html", "One")
    write_post(directory, "b.html", "Two")
    return directory
