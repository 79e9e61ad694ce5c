"""SQLite database schema and AppDatabase composition root."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from texoxide.errors import StorageError
from texoxide.infrastructure.config import DB_BUSY_TIMEOUT, DB_PATH
from texoxide.infrastructure.logger import logger


def create_schema(db: sqlite3.Connection) -> None:
    """Create all tables and indexes. Safe to call multiple times (IF NOT EXISTS)."""
    db.executescript("""
        CREATE TABLE IF NOT EXISTS files (
            path TEXT PRIMARY KEY,
            last_accessed DATETIME DEFAULT CURRENT_TIMESTAMP,
            frequency INTEGER DEFAULT 1
        );
        CREATE INDEX IF NOT EXISTS idx_files_rank ON files(frequency DESC, last_accessed DESC);
    """)


class AppDatabase:
    """Composition root that initializes the DB and exposes repositories."""

    def __init__(self) -> None:
        self._db: sqlite3.Connection | None = None
        # Repositories are set after init
        self.file_repo: FileRepository | None = None  # type: ignore[name-defined]

    @property
    def db(self) -> sqlite3.Connection:
        assert self._db is not None, "Database not initialized. Call init() first."
        return self._db

    def init(self, db_path: Path = DB_PATH) -> None:
        """Open (or create) the database file, by default at the per-user data location."""
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._db = sqlite3.connect(str(db_path), timeout=DB_BUSY_TIMEOUT)
            self._db.row_factory = sqlite3.Row
            self._init_repos()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Failed to open database {db_path}: {exc}", str(db_path)) from exc
        logger.debug("Database opened", path=str(db_path))

    def _init_test(self) -> None:
        """For tests only. Creates a fresh in-memory database."""
        self._db = sqlite3.connect(":memory:")
        self._db.row_factory = sqlite3.Row
        self._init_repos()

    def _init_repos(self) -> None:
        assert self._db is not None
        create_schema(self._db)

        # Import here to avoid circular imports
        from texoxide.files.repository import FileRepository

        self.file_repo = FileRepository(self._db)

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None
            self.file_repo = None


# Singleton instance
database = AppDatabase()
