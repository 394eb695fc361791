"""In-memory cache of parsed posts kept in sync with a directory."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Tuple

import fasteners

from postcache.ingestion.html_parser import DocumentParseError, parse_document
from postcache.models import CacheStats, Document, Fingerprint
from postcache.utils.files import directory_fingerprint, fingerprints_equal, iter_post_paths

LOGGER = logging.getLogger(__name__)


class PostNotFoundError(LookupError):
    """Raised when no cached post carries the requested id."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class PostCache:
    """Parsed posts plus the directory fingerprint they were built from.

    Reads compare a fresh fingerprint against the stored one and re-scan the
    whole directory when they differ. Documents and fingerprint are always
    replaced together under the exclusive lock. Safe for concurrent use.
    """

    def __init__(self, posts_dir: Path) -> None:
        self._posts_dir = Path(posts_dir)
        self._lock = fasteners.ReaderWriterLock()
        self._documents: Tuple[Document, ...] = ()
        self._fingerprint: Fingerprint | None = None

        self._stats_lock = threading.Lock()
        self._refreshes = 0
        self._stale_fallbacks = 0
        self._skipped_files = 0
        self._last_refresh: float | None = None

        LOGGER.info("Performing initial scan of posts directory: %s", self._posts_dir)
        with self._lock.write_lock():
            self._refresh()

    @property
    def posts_dir(self) -> Path:
        return self._posts_dir

    @property
    def stats(self) -> CacheStats:
        with self._stats_lock:
            return CacheStats(
                refreshes=self._refreshes,
                stale_fallbacks=self._stale_fallbacks,
                skipped_files=self._skipped_files,
                document_count=len(self._documents),
                last_refresh=self._last_refresh,
            )

    def get_all(self) -> Tuple[Document, ...]:
        """Return all cached posts, re-scanning first if the directory changed."""
        return self._current_documents()

    def get_by_id(self, post_id: int) -> Document:
        """Return the post with ``post_id``.

        The same change check as :meth:`get_all` runs first, so an id always
        refers to the freshest listing.

        Raises:
            PostNotFoundError: if no post has that id.
        """
        for document in self._current_documents():
            if document.id == post_id:
                return document
        raise PostNotFoundError(post_id)

    def _current_documents(self) -> Tuple[Document, ...]:
        with self._lock.read_lock():
            try:
                current = directory_fingerprint(self._posts_dir)
            except OSError as exc:
                self._record_stale_fallback()
                LOGGER.warning("Error checking directory state, returning stale data: %s", exc)
                return self._documents
            if fingerprints_equal(current, self._fingerprint):
                return self._documents

        with self._lock.write_lock():
            # Another caller may have refreshed while we waited for the lock.
            try:
                current = directory_fingerprint(self._posts_dir)
            except OSError as exc:
                self._record_stale_fallback()
                LOGGER.warning("Error checking directory state, returning stale data: %s", exc)
                return self._documents
            if fingerprints_equal(current, self._fingerprint):
                return self._documents

            LOGGER.info("Posts directory has changed. Refreshing posts...")
            try:
                self._refresh()
            except OSError as exc:
                self._record_stale_fallback()
                LOGGER.warning("Error refreshing posts, returning stale data: %s", exc)
            return self._documents

    def _refresh(self) -> None:
        """Re-read every post and swap in the new state.

        Must be called with the exclusive lock held. Raises ``OSError`` when
        the directory cannot be fingerprinted or listed, leaving the previous
        state in place.
        """
        # Fingerprint before reading so a write racing the scan is seen as a
        # change on the next read.
        fingerprint = directory_fingerprint(self._posts_dir)
        paths = list(iter_post_paths(self._posts_dir))

        documents: list[Document] = []
        skipped = 0
        for path in paths:
            try:
                raw = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.warning("Error reading post file %s: %s", path, exc)
                skipped += 1
                continue
            try:
                parsed = parse_document(raw)
            except DocumentParseError as exc:
                LOGGER.warning("Error parsing post file %s: %s", path, exc)
                skipped += 1
                continue
            documents.append(
                Document(id=len(documents), title=parsed.title, body=parsed.body, path=path)
            )

        with self._stats_lock:
            self._documents = tuple(documents)
            self._fingerprint = fingerprint
            self._refreshes += 1
            self._skipped_files += skipped
            self._last_refresh = time.time()

        LOGGER.info("Successfully refreshed posts. Found %d posts.", len(documents))

    def _record_stale_fallback(self) -> None:
        with self._stats_lock:
            self._stale_fallbacks += 1
