"""Hands the chosen file off to the user's editor."""

from __future__ import annotations

import shlex
import subprocess
import sys

from texoxide.errors import EditorLaunchError
from texoxide.infrastructure.config import EDITOR
from texoxide.infrastructure.logger import logger


def editor_command(editor: str, file_path: str) -> list[str]:
    """Split the editor setting shell-style, e.g. ``code --wait``."""
    args = shlex.split(editor, posix=sys.platform != "win32")
    if not args:
        raise EditorLaunchError("Editor command is empty", file_path)
    return [*args, file_path]


def open_file(file_path: str, editor: str | None = None) -> int:
    """Run the editor on ``file_path`` in the foreground and return its exit status."""
    command = editor_command(editor or EDITOR, file_path)
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise EditorLaunchError(f"Failed to open $EDITOR ({command[0]}): {exc}", file_path) from exc

    if result.returncode != 0:
        logger.warning("Editor exited with non-zero status", editor=command[0], status=result.returncode)
    return result.returncode
