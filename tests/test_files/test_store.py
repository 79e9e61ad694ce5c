"""Tests for the frecency store."""

import os
import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from texoxide.errors import NonExistentFile, NotFound, PathEncodingError, StorageError
from texoxide.files.store import FrecencyStore
from texoxide.files.types import format_timestamp

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


class TestAdd:
    def test_first_add_creates_entry(self, store, make_file):
        path = make_file("a.txt")
        store.add(path, now=T0)
        entry = store.get(path)
        assert entry.frequency == 1
        assert entry.last_accessed == format_timestamp(T0)

    def test_repeated_add_counts_and_keeps_last_time(self, store, make_file):
        path = make_file("a.txt")
        for i in range(5):
            store.add(path, now=_at(i))
        entry = store.get(path)
        assert entry.frequency == 5
        assert entry.last_accessed == format_timestamp(_at(4))

    def test_relative_and_absolute_are_one_entry(self, store, make_file, tmp_path, monkeypatch):
        path = make_file("a.txt")
        monkeypatch.chdir(tmp_path)
        assert store.add("a.txt") == path
        store.add(path)
        store.add("./a.txt")
        assert store.get(path).frequency == 3
        assert store.query("") == [path]

    def test_missing_file_rejected(self, store, tmp_path):
        with pytest.raises(NonExistentFile):
            store.add(str(tmp_path / "missing.txt"))
        assert store.query("") == []

    def test_default_timestamp_is_now(self, store, make_file):
        path = make_file("a.txt")
        before = format_timestamp(datetime.now(timezone.utc))
        store.add(path)
        after = format_timestamp(datetime.now(timezone.utc))
        assert before <= store.get(path).last_accessed <= after

    def test_naive_datetime_taken_as_utc(self, store, make_file):
        path = make_file("a.txt")
        store.add(path, now=datetime(2024, 5, 1, 12, 0, 0))
        assert store.get(path).last_accessed == "2024-05-01 12:00:00.000000"

    def test_upsert_visible_to_second_connection(self, tmp_path, make_file):
        from texoxide.infrastructure.database import AppDatabase

        path = make_file("shared.txt")
        db_path = tmp_path / "shared.db"
        first, second = AppDatabase(), AppDatabase()
        first.init(db_path)
        second.init(db_path)
        try:
            FrecencyStore(first.file_repo).add(path)
            FrecencyStore(second.file_repo).add(path)
            assert FrecencyStore(first.file_repo).get(path).frequency == 2
        finally:
            first.close()
            second.close()


class TestRemove:
    def test_remove_never_added(self, store):
        with pytest.raises(NotFound):
            store.remove("/nonexistent")

    def test_add_then_remove(self, store, make_file):
        path = make_file("a.txt")
        store.add(path)
        assert store.remove(path) == path
        assert path not in store.query("")

    def test_remove_by_relative_path(self, store, make_file, tmp_path, monkeypatch):
        path = make_file("a.txt")
        store.add(path)
        monkeypatch.chdir(tmp_path)
        store.remove("a.txt")
        assert store.query("") == []

    def test_remove_deleted_file_by_stored_path(self, store, make_file):
        path = make_file("a.txt")
        store.add(path)
        os.remove(path)
        # Can't canonicalize any more; falls back to the raw string.
        store.remove(path)
        assert store.get(path) is None

    def test_remove_unencodable_path(self, store, tmp_path):
        with pytest.raises(PathEncodingError):
            store.remove(str(tmp_path / "bad-\udcff.txt"))

    def test_remove_twice(self, store, make_file):
        path = make_file("a.txt")
        store.add(path)
        store.remove(path)
        with pytest.raises(NotFound):
            store.remove(path)


class TestCleanup:
    def test_drops_only_missing_files(self, store, make_file):
        keep = make_file("keep.txt")
        gone = make_file("gone.txt")
        store.add(keep, now=_at(0))
        store.add(keep, now=_at(1))
        store.add(gone, now=_at(2))
        os.remove(gone)

        assert store.cleanup() == [gone]

        assert store.query("") == [keep]
        entry = store.get(keep)
        assert entry.frequency == 2
        assert entry.last_accessed == format_timestamp(_at(1))

    def test_nothing_missing(self, store, make_file):
        store.add(make_file("a.txt"))
        assert store.cleanup() == []

    def test_empty_store(self, store):
        assert store.cleanup() == []

    def test_unreadable_entry_is_kept(self, store, make_file, deny_stat):
        locked = make_file("locked/bad.txt")
        gone = make_file("gone.txt")
        store.add(locked, now=_at(0))
        store.add(gone, now=_at(1))
        os.remove(gone)
        deny_stat(locked)

        assert store.cleanup() == [gone]
        assert store.query("") == [locked]
        assert store.entries("")[0].last_accessed == format_timestamp(_at(0))

    def test_only_unreadable_entries(self, store, make_file, deny_stat):
        locked = make_file("locked.txt")
        store.add(locked)
        deny_stat(locked)
        assert store.cleanup() == []
        assert store.query("") == [locked]


class TestQuery:
    def test_substring_filter(self, store, make_file):
        notes = make_file("notes/todo.md")
        code = make_file("src/main.py")
        store.add(notes)
        store.add(code)
        assert store.query("notes") == [notes]
        assert store.query("main.py") == [code]
        assert store.query("nothing-like-this") == []

    def test_frequency_outranks_recency(self, store, make_file):
        a = make_file("a/b.txt")
        c = make_file("c/d.txt")
        store.add(a, now=_at(0))
        store.add(a, now=_at(1))
        store.add(c, now=_at(2))
        assert store.query("") == [a, c]

    def test_recency_breaks_ties(self, store, make_file):
        older = make_file("older.txt")
        newer = make_file("newer.txt")
        store.add(newer, now=_at(5))
        store.add(older, now=_at(1))
        assert store.query("") == [newer, older]

    def test_results_are_ranked_and_capped(self, store, make_file):
        for i in range(25):
            path = make_file(f"f{i:02d}.txt")
            for n in range(i % 4 + 1):
                store.add(path, now=_at(i * 10 + n))

        results = store.entries("")
        assert len(results) == 20
        keys = [(e.frequency, e.last_accessed) for e in results]
        assert keys == sorted(keys, reverse=True)

    def test_custom_limit(self, db, make_file):
        small = FrecencyStore(db.file_repo, limit=2)
        for name in ("a.txt", "b.txt", "c.txt"):
            small.add(make_file(name))
        assert len(small.query("")) == 2

    def test_percent_in_term_is_literal(self, store, make_file):
        pct = make_file("50%off.txt")
        plain = make_file("50xoff.txt")
        store.add(pct)
        store.add(plain)
        assert store.query("50%off") == [pct]

    def test_underscore_in_term_is_literal(self, store, make_file):
        under = make_file("a_b.txt")
        other = make_file("axb.txt")
        store.add(under)
        store.add(other)
        assert store.query("a_b") == [under]

    def test_backslash_in_term_is_literal(self, store, make_file):
        slashed = make_file("back\\slash.txt")
        plain = make_file("backslash.txt")
        store.add(slashed)
        store.add(plain)
        assert store.query("k\\s") == [slashed]

    def test_unencodable_term_rejected(self, store, make_file):
        store.add(make_file("a.txt"))
        with pytest.raises(PathEncodingError):
            store.query("bad-\udcff")


class TestStorageErrors:
    def test_closed_connection_raises_storage_error(self, db, make_file):
        store = FrecencyStore(db.file_repo)
        path = make_file("a.txt")
        db.db.close()
        with pytest.raises(StorageError):
            store.add(path)
        with pytest.raises(StorageError):
            store.query("")
        with pytest.raises(StorageError):
            store.cleanup()

    def test_storage_error_wraps_sqlite_error(self, db):
        store = FrecencyStore(db.file_repo)
        db.db.close()
        with pytest.raises(StorageError) as excinfo:
            store.remove("/x")
        assert isinstance(excinfo.value.__cause__, sqlite3.Error)
