"""Bounded depth-first search over file names and contents."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List, Literal

from homescope.config import DEFAULT_SKIP_DIRS, MAX_SEARCH_FILE_BYTES, MAX_SEARCH_RESULTS
from homescope.models import SearchResult
from homescope.utils.files import is_hidden, is_within_root
from homescope.utils.text import find_snippet

LOGGER = logging.getLogger(__name__)

SearchMode = Literal["name", "content"]
SEARCH_MODES: tuple[str, ...] = ("name", "content")


class TreeSearcher:
    """Walks the root depth-first, matching names or contents.

    The walk stops everywhere as soon as ``max_results`` matches have been
    collected. Directories in ``skip_dirs`` and hidden entries are never
    visited. A failure on one entry only skips that entry.
    """

    def __init__(
        self,
        root: Path,
        *,
        max_results: int = MAX_SEARCH_RESULTS,
        max_file_bytes: int = MAX_SEARCH_FILE_BYTES,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    ) -> None:
        self.root = root
        self.max_results = max_results
        self.max_file_bytes = max_file_bytes
        self.skip_dirs = frozenset(skip_dirs)

    def search(self, query: str, *, mode: SearchMode = "name") -> List[SearchResult]:
        if mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode: {mode}")
        if not query:
            return []
        results: List[SearchResult] = []
        self._walk(self.root, "", query, mode, results)
        LOGGER.debug("Search %r (%s) found %d results", query, mode, len(results))
        return results

    def _full(self, results: List[SearchResult]) -> bool:
        return len(results) >= self.max_results

    def _walk(
        self,
        directory: Path,
        rel_base: str,
        query: str,
        mode: SearchMode,
        results: List[SearchResult],
    ) -> None:
        if self._full(results):
            return
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            LOGGER.debug("Skipping directory %s: %s", directory, exc)
            return

        for entry in entries:
            if self._full(results):
                return
            if is_hidden(entry.name):
                continue
            rel = f"{rel_base}/{entry.name}" if rel_base else entry.name

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                if entry.name not in self.skip_dirs:
                    self._walk(Path(entry.path), rel, query, mode, results)
                continue

            if mode == "name":
                if query.lower() in entry.name.lower():
                    results.append(SearchResult(path=rel, name=entry.name, type="file"))
                continue

            snippet = self._match_content(Path(entry.path), query)
            if snippet is not None:
                results.append(
                    SearchResult(path=rel, name=entry.name, type="content", match=snippet)
                )

    def _match_content(self, path: Path, query: str) -> str | None:
        """Return a snippet around the first match, or None when absent or unreadable."""
        try:
            if path.is_symlink() and not is_within_root(self.root, os.path.realpath(path)):
                return None
            st = path.stat()
            if not stat.S_ISREG(st.st_mode) or st.st_size > self.max_file_bytes:
                return None
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOGGER.debug("Skipping file %s: %s", path, exc)
            return None
        return find_snippet(text, query)


def search_tree(
    root: Path,
    query: str,
    mode: SearchMode = "name",
    *,
    max_results: int = MAX_SEARCH_RESULTS,
    max_file_bytes: int = MAX_SEARCH_FILE_BYTES,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> List[SearchResult]:
    """Search names or contents beneath ``root``. Never raises for a bad entry."""
    searcher = TreeSearcher(
        root,
        max_results=max_results,
        max_file_bytes=max_file_bytes,
        skip_dirs=skip_dirs,
    )
    return searcher.search(query, mode=mode)
