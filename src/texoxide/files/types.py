"""File usage domain types."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

# Same shape as SQLite's CURRENT_TIMESTAMP, with microseconds so ordering is strict.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.strftime(TIMESTAMP_FORMAT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FileEntry(BaseModel):
    path: str  # Canonical absolute path, unique key
    last_accessed: str  # UTC, TIMESTAMP_FORMAT (or CURRENT_TIMESTAMP for rows inserted by hand)
    frequency: int = Field(default=1, ge=1)
