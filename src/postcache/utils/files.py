"""Utility helpers for working with the posts directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from postcache.models import Fingerprint

POST_EXTENSIONS = frozenset({".html", ".htm"})


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def iter_post_paths(directory: Path) -> Iterator[Path]:
    """Yield HTML files directly inside ``directory`` in file name order.

    Subdirectories are not descended into. Listing errors propagate.
    """
    with os.scandir(directory) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if entry.is_file() and Path(entry.name).suffix.lower() in POST_EXTENSIONS
        )
    for name in names:
        yield Path(directory) / name


def directory_fingerprint(directory: Path) -> Fingerprint:
    """Map every file under ``directory`` to its modification time.

    The walk is recursive and directories themselves are not recorded, but
    symlinks to directories are, since they are not followed. Any
    traversal error is raised instead of returning a partial mapping.
    """
    root = os.path.abspath(directory)
    state: Fingerprint = {}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in dirnames:
            path = os.path.join(dirpath, name)
            if os.path.islink(path):
                state[path] = os.lstat(path).st_mtime_ns
        for name in filenames:
            path = os.path.join(dirpath, name)
            state[path] = os.lstat(path).st_mtime_ns
    return state


def fingerprints_equal(left: Fingerprint | None, right: Fingerprint | None) -> bool:
    """Compare two fingerprints key by key."""
    if left is None or right is None:
        return left is right
    if len(left) != len(right):
        return False
    for path, mtime in left.items():
        if path not in right or right[path] != mtime:
            return False
    return True
