"""Launcher — wires store, menu, and editor together for one invocation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from texoxide.execution.editor import open_file
from texoxide.files import paths
from texoxide.files.store import FrecencyStore
from texoxide.files.types import FileEntry
from texoxide.infrastructure.logger import logger
from texoxide.menu.terminal import show_search_results

Chooser = Callable[[Sequence[str], str], int | None]
EditorOpener = Callable[[str], int]


@dataclass
class LaunchResult:
    status: Literal["opened", "cancelled", "no_match"]
    path: str | None = None
    editor_status: int | None = None


class Launcher:
    """Resolve query → cleanup → rank → choose → record → open."""

    def __init__(
        self,
        store: FrecencyStore,
        choose: Chooser = show_search_results,
        open_editor: EditorOpener = open_file,
    ) -> None:
        self._store = store
        self._choose = choose
        self._open_editor = open_editor

    def launch(self, query: str = "") -> LaunchResult:
        self._store.cleanup()

        candidates = self._store.query(query)
        logger.debug("Ranked candidates", query=query, count=len(candidates))

        if candidates:
            if len(candidates) == 1:
                index: int | None = 0
            else:
                index = self._choose(candidates, f" Matches for '{query}' ")
            if index is None:
                return LaunchResult(status="cancelled")
            return self._open(candidates[index])

        # Nothing stored yet: a query naming a real file starts tracking it.
        if query and self._is_existing_file(query):
            return self._open(query)

        return LaunchResult(status="no_match")

    def remove(self, path: str) -> str:
        return self._store.remove(path)

    def list_entries(self, query: str = "") -> list[FileEntry]:
        self._store.cleanup()
        return self._store.entries(query)

    def _is_existing_file(self, query: str) -> bool:
        try:
            return paths.exists(query)
        except (OSError, ValueError):
            logger.warning("Could not check query as a path", query=query, exc_info=True)
            return False

    def _open(self, path: str) -> LaunchResult:
        canonical = self._store.add(path)
        logger.info("Opening file", path=canonical)
        status = self._open_editor(canonical)
        return LaunchResult(status="opened", path=canonical, editor_status=status)
