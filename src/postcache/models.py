"""Core postcache data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

# Absolute file path -> modification time in nanoseconds.
Fingerprint = Dict[str, int]


@dataclass(frozen=True, slots=True)
class Document:
    """A parsed post as served from the cache."""

    id: int
    title: str = ""
    body: str = ""
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Snapshot of cache activity counters."""

    refreshes: int = 0
    stale_fallbacks: int = 0
    skipped_files: int = 0
    document_count: int = 0
    last_refresh: float | None = None
