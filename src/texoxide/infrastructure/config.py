"""Configuration constants, env file parsing, and per-user locations."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

APP_NAME: str = "texoxide"


def read_env_file(keys: list[str], env_file: Path) -> dict[str, str]:
    """Parse a KEY=VALUE file and return values for requested keys.

    Does NOT load into os.environ — callers decide what to do with values,
    so nothing leaks into the editor process we spawn.
    """
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def resolve_config_dir(env: Mapping[str, str], platform: str = sys.platform) -> Path:
    if platform == "win32":
        base = env.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / APP_NAME / "config"
    if platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path(env.get("XDG_CONFIG_HOME") or Path.home() / ".config") / APP_NAME


def resolve_data_dir(env: Mapping[str, str], platform: str = sys.platform) -> Path:
    """Per-user application data directory, keyed by APP_NAME."""
    override = env.get("TEXOXIDE_DATA_DIR")
    if override:
        return Path(override).expanduser()
    if platform == "win32":
        base = env.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / APP_NAME / "data"
    if platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path(env.get("XDG_DATA_HOME") or Path.home() / ".local" / "share") / APP_NAME


def resolve_editor(env: Mapping[str, str], platform: str = sys.platform) -> str:
    """Editor command: TEXOXIDE_EDITOR, then EDITOR, then a platform default."""
    editor = env.get("TEXOXIDE_EDITOR") or env.get("EDITOR")
    if editor:
        return editor
    return "notepad" if platform == "win32" else "vim"


def parse_timeout(raw: str | None, default: float = 5.0) -> float:
    """Busy timeout in seconds; unset, non-numeric or negative values use the default."""
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value >= 0 else default


CONFIG_DIR: Path = resolve_config_dir(os.environ)
ENV_FILE: Path = CONFIG_DIR / "config.env"

# Read config values from the env file (os.environ wins).
_env_config = read_env_file(
    ["TEXOXIDE_DATA_DIR", "TEXOXIDE_EDITOR", "EDITOR", "LOG_LEVEL", "TEXOXIDE_DB_TIMEOUT"], ENV_FILE
)
_merged_env: dict[str, str] = {**_env_config, **{k: v for k, v in os.environ.items() if v}}

DATA_DIR: Path = resolve_data_dir(_merged_env)
DB_PATH: Path = DATA_DIR / f"{APP_NAME}.db"
EDITOR: str = resolve_editor(_merged_env)
LOG_LEVEL: str = _merged_env.get("LOG_LEVEL", "WARNING").upper()

QUERY_LIMIT: int = 20
DB_BUSY_TIMEOUT: float = parse_timeout(_merged_env.get("TEXOXIDE_DB_TIMEOUT"))  # seconds
