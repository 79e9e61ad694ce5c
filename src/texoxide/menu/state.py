"""Single-selection menu state machine."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass


class MenuEvent(enum.Enum):
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Active:
    cursor: int


@dataclass(frozen=True)
class Selected:
    index: int


@dataclass(frozen=True)
class Cancelled:
    pass


MenuStatus = Active | Selected | Cancelled


class Menu:
    """Cursor over a fixed, non-empty list of candidates.

    Events are consumed one at a time by ``handle``, which returns True when
    the event changed the state (and the caller should redraw).
    """

    def __init__(self, items: Sequence[str], title: str = "") -> None:
        if not items:
            raise ValueError("Menu requires at least one item")
        self.items: tuple[str, ...] = tuple(items)
        self.title = title
        self.status: MenuStatus = Active(0)

    @property
    def cursor(self) -> int:
        if isinstance(self.status, Active):
            return self.status.cursor
        if isinstance(self.status, Selected):
            return self.status.index
        raise ValueError("Cancelled menu has no cursor")

    @property
    def done(self) -> bool:
        return not isinstance(self.status, Active)

    @property
    def selection(self) -> int | None:
        """Chosen index once Selected, otherwise None."""
        if isinstance(self.status, Selected):
            return self.status.index
        return None

    def handle(self, event: MenuEvent | None) -> bool:
        if not isinstance(self.status, Active):
            return False
        cursor = self.status.cursor
        count = len(self.items)

        if event is MenuEvent.NAVIGATE_DOWN:
            self.status = Active((cursor + 1) % count)
        elif event is MenuEvent.NAVIGATE_UP:
            self.status = Active((cursor - 1 + count) % count)
        elif event is MenuEvent.CONFIRM:
            self.status = Selected(cursor)
        elif event is MenuEvent.CANCEL:
            self.status = Cancelled()
        else:
            return False
        return True
