"""Frecency store — usage recording, removal, self-healing, and ranking."""

from __future__ import annotations

import sqlite3
from datetime import datetime

from texoxide.errors import NotFound, StorageError
from texoxide.files import paths
from texoxide.files.repository import FileRepository
from texoxide.files.types import FileEntry, format_timestamp, utc_now
from texoxide.infrastructure.config import QUERY_LIMIT
from texoxide.infrastructure.logger import logger


class FrecencyStore:
    """Ranks files by how often (then how recently) they were opened."""

    def __init__(self, file_repo: FileRepository, limit: int = QUERY_LIMIT) -> None:
        self._file_repo = file_repo
        self._limit = limit

    # --- Recording ---

    def add(self, path: str, now: datetime | None = None) -> str:
        """Record one use of ``path`` and return its canonical form.

        Raises NonExistentFile if the file is missing on disk.
        """
        canonical = paths.resolve(path)
        accessed_at = format_timestamp(now or utc_now())
        try:
            self._file_repo.upsert(canonical, accessed_at)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to record {canonical}: {exc}", canonical) from exc
        logger.debug("Recorded file use", path=canonical)
        return canonical

    def remove(self, path: str) -> str:
        key = paths.resolve_for_removal(path)
        try:
            deleted = self._file_repo.delete(key)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to remove {key}: {exc}", key) from exc
        if not deleted:
            raise NotFound(f"No entry found for {path}", path)
        logger.info("Removed entry", path=key)
        return key

    # --- Maintenance ---

    def cleanup(self) -> list[str]:
        """Delete entries whose file no longer exists. Returns the removed paths."""
        try:
            stored = self._file_repo.all_paths()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to list entries: {exc}") from exc

        missing: list[str] = []
        for stored_path in stored:
            try:
                if not paths.exists(stored_path):
                    missing.append(stored_path)
            except (OSError, ValueError):
                # Unreadable is not gone; keep the row.
                logger.warning("Could not check entry, skipping", path=stored_path, exc_info=True)

        if missing:
            try:
                self._file_repo.delete_many(missing)
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to remove stale entries: {exc}") from exc
            logger.info("Removed stale entries", count=len(missing))
        return missing

    # --- Ranking ---

    def query(self, term: str = "") -> list[str]:
        return [entry.path for entry in self.entries(term)]

    def entries(self, term: str = "") -> list[FileEntry]:
        paths.as_text(term)
        try:
            return self._file_repo.search(term, self._limit)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to query entries: {exc}") from exc

    def get(self, path: str) -> FileEntry | None:
        key = paths.resolve_for_removal(path)
        try:
            return self._file_repo.get(key)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read entry {key}: {exc}", key) from exc
