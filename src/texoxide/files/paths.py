"""Canonical path identity for stored entries."""

from __future__ import annotations

import os
from pathlib import Path

from texoxide.errors import NonExistentFile, PathEncodingError

EXTENDED_PATH_PREFIX = "\\\\?\\"


def exists(path: str) -> bool:
    """True if ``path`` is present on disk.

    Only a missing entry counts as absent; any other stat failure
    (permissions, I/O) is raised to the caller.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True


def as_text(value: str) -> str:
    """Reject strings carrying undecodable bytes (surrogate escapes)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathEncodingError(f"Invalid file path encoding: {value!r}", value) from exc
    return value


def canonicalize(raw: str) -> Path:
    """Fully resolved absolute path. Raises OSError if the target is missing."""
    return Path(raw).expanduser().resolve(strict=True)


def resolve(raw: str) -> str:
    """Canonical identity of an existing file.

    The same filesystem entry always yields the same string: ``~`` is
    expanded and symlinks and ``..`` components are resolved.
    """
    as_text(raw)
    try:
        present = exists(os.path.expanduser(raw))
    except (OSError, ValueError) as exc:
        raise NonExistentFile(f"Cannot access {raw}: {exc}", raw) from exc
    if not present:
        raise NonExistentFile(f"File {raw} does not exist", raw)
    try:
        canonical = canonicalize(raw)
    except OSError as exc:
        raise NonExistentFile(f"File {raw} does not exist", raw) from exc
    return as_text(str(canonical))


def resolve_for_removal(raw: str) -> str:
    """Best-effort identity: canonical when possible, else the raw string.

    Raises PathEncodingError rather than hand an unencodable key to SQLite.
    """
    as_text(raw)
    try:
        canonical = canonicalize(raw)
    except (OSError, ValueError):
        return raw
    return as_text(str(canonical))


def display_path(path: str) -> str:
    """Strip the Windows extended-length prefix for display."""
    if path.startswith(EXTENDED_PATH_PREFIX):
        return path[len(EXTENDED_PATH_PREFIX) :]
    return path
