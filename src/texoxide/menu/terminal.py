"""Curses front end for the selection menu."""

from __future__ import annotations

import curses
import locale
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from texoxide.errors import TerminalIOError
from texoxide.files.paths import display_path
from texoxide.infrastructure.logger import logger
from texoxide.menu.state import Menu, MenuEvent

ESCAPE = 27
HIGHLIGHT_SYMBOL = ">> "
FOOTER = "↑/↓ Navigate  Enter Select  Esc Exit"

_KEYMAP: dict[int, MenuEvent] = {
    curses.KEY_UP: MenuEvent.NAVIGATE_UP,
    ord("k"): MenuEvent.NAVIGATE_UP,
    curses.KEY_DOWN: MenuEvent.NAVIGATE_DOWN,
    ord("j"): MenuEvent.NAVIGATE_DOWN,
    curses.KEY_ENTER: MenuEvent.CONFIRM,
    ord("\n"): MenuEvent.CONFIRM,
    ord("\r"): MenuEvent.CONFIRM,
    ESCAPE: MenuEvent.CANCEL,
    ord("q"): MenuEvent.CANCEL,
}


def key_to_event(ch: int) -> MenuEvent | None:
    return _KEYMAP.get(ch)


@contextmanager
def terminal_session() -> Iterator[Any]:
    """Own the terminal for the duration of the block.

    Cooked mode, echo and the cursor are restored on every exit path,
    including exceptions raised inside the block and KeyboardInterrupt.
    """
    try:
        locale.setlocale(locale.LC_ALL, "")  # addstr encodes text with the locale codec
    except locale.Error:
        logger.debug("Unsupported locale, keeping C locale")
    try:
        stdscr = curses.initscr()
    except curses.error as exc:
        raise TerminalIOError(f"Failed to initialize terminal: {exc}") from exc

    try:
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal can't hide the cursor
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass
        yield stdscr
    except curses.error as exc:
        raise TerminalIOError(f"Terminal I/O failed: {exc}") from exc
    finally:
        try:
            stdscr.keypad(False)
            curses.echo()
            curses.nocbreak()
        finally:
            curses.endwin()


def draw(screen: Any, menu: Menu) -> None:
    """Render title, visible window of the list, and the key hints."""
    screen.erase()
    height, width = screen.getmaxyx()
    line_width = max(width - 1, 1)

    title = menu.title
    screen.addnstr(0, max(0, (width - len(title)) // 2), title, line_width, curses.A_BOLD)
    screen.addnstr(1, 0, "─" * line_width, line_width, curses.A_DIM)

    top = 2
    body_h = height - top - 2
    if body_h >= 1:
        cursor = menu.cursor
        offset = max(0, cursor - body_h + 1)
        visible = menu.items[offset : offset + body_h]
        for row, item in enumerate(visible):
            index = offset + row
            text = display_path(item)
            if index == cursor:
                screen.addnstr(top + row, 0, HIGHLIGHT_SYMBOL + text, line_width, curses.A_REVERSE | curses.A_BOLD)
            else:
                screen.addnstr(top + row, 0, " " * len(HIGHLIGHT_SYMBOL) + text, line_width)

    if height >= 2:
        screen.addnstr(height - 2, 0, "─" * line_width, line_width, curses.A_DIM)
        screen.addnstr(height - 1, max(0, (width - len(FOOTER)) // 2), FOOTER, line_width, curses.A_DIM)
    screen.refresh()


def run_menu(screen: Any, menu: Menu) -> int | None:
    """Read keys until the menu is confirmed or cancelled.

    Redraws once per accepted transition (and on resize).
    """
    try:
        draw(screen, menu)
        while not menu.done:
            ch = screen.getch()
            if ch == curses.KEY_RESIZE:
                draw(screen, menu)
                continue
            if menu.handle(key_to_event(ch)) and not menu.done:
                draw(screen, menu)
    except curses.error as exc:
        raise TerminalIOError(f"Terminal I/O failed: {exc}") from exc
    return menu.selection


def show_search_results(items: Sequence[str], title: str) -> int | None:
    """Let the user pick one of ``items``; returns its index, or None if cancelled."""
    menu = Menu(items, title)
    with terminal_session() as screen:
        return run_menu(screen, menu)
