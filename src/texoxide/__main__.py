"""Entry point: python -m texoxide"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from texoxide.app import Launcher
from texoxide.errors import TexoxideError
from texoxide.files.paths import display_path
from texoxide.files.store import FrecencyStore
from texoxide.infrastructure.config import DB_PATH
from texoxide.infrastructure.database import AppDatabase, database
from texoxide.infrastructure.logger import logger


def _build_launcher(db: AppDatabase, db_path: Path) -> Launcher:
    db.init(db_path)
    return Launcher(FrecencyStore(db.file_repo))


def run_remove(argv: list[str], db: AppDatabase, db_path: Path) -> int:
    parser = argparse.ArgumentParser(prog="texoxide remove", description="Forget a file")
    parser.add_argument("file_path", metavar="FILE_PATH", help="Path of the entry to remove")
    args = parser.parse_args(argv)

    launcher = _build_launcher(db, db_path)
    launcher.remove(args.file_path)
    print(f"Removed {args.file_path} from list")
    return 0


def run_list(argv: list[str], db: AppDatabase, db_path: Path) -> int:
    parser = argparse.ArgumentParser(prog="texoxide list", description="Show ranked entries")
    parser.add_argument("query", metavar="QUERY", nargs="?", default="", help="Substring to filter by")
    args = parser.parse_args(argv)

    launcher = _build_launcher(db, db_path)
    for entry in launcher.list_entries(args.query):
        print(f"{entry.frequency:>5}  {entry.last_accessed[:19]}  {display_path(entry.path)}")
    return 0


def run_launch(argv: list[str], db: AppDatabase, db_path: Path) -> int:
    parser = argparse.ArgumentParser(
        prog="texoxide",
        description="Open frequently used files. Subcommands: remove FILE_PATH, list [QUERY].",
        epilog="To search for the words 'remove' or 'list', put -- before the query: texoxide -- list",
    )
    parser.add_argument("query", metavar="QUERY", nargs="?", default="", help="Substring of the file path")
    args = parser.parse_args(argv)

    launcher = _build_launcher(db, db_path)
    result = launcher.launch(args.query)
    if result.status == "no_match":
        print(f"No matches for '{args.query}'", file=sys.stderr)
    return 0


COMMANDS = {
    "remove": run_remove,
    "list": run_list,
}


def main(argv: list[str] | None = None, db: AppDatabase = database, db_path: Path = DB_PATH) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if argv and argv[0] in COMMANDS:
        command, rest = COMMANDS[argv[0]], argv[1:]
    else:
        command, rest = run_launch, argv

    try:
        return command(rest, db, db_path)
    except TexoxideError as exc:
        logger.debug("Command failed", error=str(exc), kind=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
