"""Single-level directory listing with per-entry metadata."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from homescope.errors import NotFoundError
from homescope.models import TreeEntry, mtime_to_datetime
from homescope.utils.files import is_hidden

LOGGER = logging.getLogger(__name__)

MIN_DEPTH = 1
MAX_DEPTH = 3


def clamp_depth(depth: int) -> int:
    return max(MIN_DEPTH, min(depth, MAX_DEPTH))


def count_children(directory: Path) -> int:
    """Number of immediate children, or 0 when the directory cannot be read."""
    try:
        return len(os.listdir(directory))
    except OSError:
        return 0


def build_entry(path: Path) -> TreeEntry:
    """Stat ``path`` and describe it. A failed stat yields an ``unknown`` entry."""
    try:
        st = path.stat()
    except OSError as exc:
        LOGGER.debug("Cannot stat %s: %s", path, exc)
        return TreeEntry(name=path.name, type="unknown", size=0)

    entry = TreeEntry(
        name=path.name,
        type="file",
        size=st.st_size,
        modified=mtime_to_datetime(st.st_mtime),
    )
    if stat.S_ISDIR(st.st_mode):
        entry.type = "directory"
        entry.children_count = count_children(path)
    else:
        entry.extension = path.suffix
    return entry


def _sort_key(entry: TreeEntry) -> tuple[bool, str, str]:
    # Case-insensitive first; case only breaks ties.
    return entry.type != "directory", entry.name.casefold(), entry.name


def list_directory(directory: Path, depth: int = 1) -> list[TreeEntry]:
    """List the visible children of ``directory``, directories first.

    ``depth`` is clamped into ``[1, 3]``; the listing itself is always one
    level deep and callers descend with further calls. Hidden entries are
    omitted. Raises ``NotFoundError`` if ``directory`` cannot be enumerated.
    """
    depth = clamp_depth(depth)
    try:
        names = os.listdir(directory)
    except OSError as exc:
        LOGGER.debug("Cannot read directory %s: %s", directory, exc)
        raise NotFoundError("Cannot read directory") from exc

    LOGGER.debug("Listing %s (%d entries, depth=%d)", directory, len(names), depth)
    entries = [build_entry(directory / name) for name in names if not is_hidden(name)]
    entries.sort(key=_sort_key)
    return entries
