import os

import pytest

from texoxide.files.store import FrecencyStore
from texoxide.infrastructure.database import AppDatabase


@pytest.fixture
def db() -> AppDatabase:
    """Create an in-memory database for testing."""
    app_db = AppDatabase()
    app_db._init_test()
    return app_db


@pytest.fixture
def store(db: AppDatabase) -> FrecencyStore:
    return FrecencyStore(db.file_repo)


@pytest.fixture
def make_file(tmp_path):
    """Create a real file under tmp_path and return its canonical path string."""

    def _make(name: str, content: str = "") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return str(path.resolve())

    return _make


@pytest.fixture
def deny_stat(monkeypatch):
    """Make os.stat fail with PermissionError for the given paths only."""
    denied: set[str] = set()
    real_stat = os.stat

    def fake_stat(target, *args, **kwargs):
        if os.fspath(target) in denied:
            raise PermissionError(13, "Permission denied", os.fspath(target))
        return real_stat(target, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)
    return denied.add
