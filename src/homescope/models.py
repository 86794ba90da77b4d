"""Core homescope data models.

All of these are built fresh for each request from live ``stat`` and
``scandir`` calls and are never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

EntryType = Literal["file", "directory", "unknown"]
ContentType = Literal["markdown", "json", "jsonl", "text"]
MatchType = Literal["file", "content"]


def mtime_to_datetime(mtime: float) -> datetime:
    """Convert a ``st_mtime`` value to an aware UTC datetime."""
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


@dataclass(slots=True)
class TreeEntry:
    """One immediate child of a listed directory."""

    name: str
    type: EntryType
    size: int
    modified: datetime | None = None
    extension: str | None = None
    children_count: int | None = None


@dataclass(slots=True)
class FileView:
    """Contents of a single file. ``truncated`` is set when leading lines were dropped."""

    path: str
    content_type: ContentType
    content: str
    size: int
    modified: datetime
    truncated: bool = False


@dataclass(slots=True)
class SearchResult:
    path: str
    name: str
    type: MatchType
    match: str | None = None


@dataclass(slots=True)
class SectionStat:
    key: str
    path: str
    label: str
    description: str
    count: int = 0
    total_size_bytes: int = 0


@dataclass(slots=True)
class KeyFileStat:
    name: str
    size: int = 0
    modified: datetime | None = None
