"""Error kinds surfaced to the command line."""

from __future__ import annotations


class TexoxideError(Exception):
    """Base class for expected failures; the CLI prints these and exits 1."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFound(TexoxideError):
    """No stored entry matches the path given to remove."""


class NonExistentFile(TexoxideError):
    """The file to record does not exist on disk."""


class PathEncodingError(TexoxideError):
    """The path cannot be represented as valid UTF-8 text."""


class StorageError(TexoxideError):
    """The SQLite layer failed."""


class TerminalIOError(TexoxideError):
    """Setting up, reading from, or drawing to the terminal failed."""


class EditorLaunchError(TexoxideError):
    """The editor process could not be started."""
