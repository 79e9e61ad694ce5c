"""File usage persistence: upsert, delete, ranked lookup."""

from __future__ import annotations

import sqlite3

from texoxide.files.types import FileEntry


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with the term's own wildcards taken literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class FileRepository:
    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def upsert(self, path: str, accessed_at: str) -> None:
        # One statement, so concurrent invocations can't lose an increment.
        self._db.execute(
            """INSERT INTO files (path, last_accessed, frequency) VALUES (?, ?, 1)
               ON CONFLICT(path) DO UPDATE SET
                   frequency = frequency + 1,
                   last_accessed = MAX(last_accessed, excluded.last_accessed)""",
            (path, accessed_at),
        )
        self._db.commit()

    def get(self, path: str) -> FileEntry | None:
        row = self._db.execute("SELECT * FROM files WHERE path = ?", (path,)).fetchone()
        if not row:
            return None
        return self._row_to_entry(row)

    def delete(self, path: str) -> bool:
        result = self._db.execute("DELETE FROM files WHERE path = ?", (path,))
        self._db.commit()
        return result.rowcount > 0

    def delete_many(self, paths: list[str]) -> int:
        if not paths:
            return 0
        result = self._db.executemany("DELETE FROM files WHERE path = ?", [(p,) for p in paths])
        self._db.commit()
        return result.rowcount

    def all_paths(self) -> list[str]:
        rows = self._db.execute("SELECT path FROM files").fetchall()
        return [row["path"] for row in rows]

    def search(self, term: str, limit: int) -> list[FileEntry]:
        rows = self._db.execute(
            """SELECT * FROM files
               WHERE path LIKE ? ESCAPE '\\'
               ORDER BY frequency DESC, last_accessed DESC
               LIMIT ?""",
            (like_pattern(term), limit),
        ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def _row_to_entry(self, row: sqlite3.Row) -> FileEntry:
        return FileEntry(
            path=row["path"],
            last_accessed=str(row["last_accessed"]),
            frequency=row["frequency"],
        )
