"""Tests for the bounded tree search."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from homescope.explorer.search import TreeSearcher, search_tree
from homescope.models import SearchResult


class TestSearchResult:
    """Test SearchResult dataclass."""

    def test_create_search_result(self) -> None:
        result = SearchResult(path="sub/deep.txt", name="deep.txt", type="content", match="findme")

        assert result.path == "sub/deep.txt"
        assert result.match == "findme"

    def test_match_defaults_to_none(self) -> None:
        assert SearchResult(path="a", name="a", type="file").match is None


class TestNameSearch:
    """Test name-mode search."""

    def test_matches_base_name_case_insensitively(self, home: Path) -> None:
        results = search_tree(home, "DEEP")

        assert results == [SearchResult(path="sub/deep.txt", name="deep.txt", type="file")]

    def test_directories_are_walked_not_reported(self, home: Path) -> None:
        assert search_tree(home, "sub") == []

    def test_hidden_entries_never_match(self, home: Path) -> None:
        assert search_tree(home, "secret") == []

    def test_hidden_directories_not_walked(self, home: Path) -> None:
        hidden = home / ".cache"
        hidden.mkdir()
        (hidden / "target.txt").write_text("x")

        assert search_tree(home, "target") == []

    def test_paths_use_forward_slashes(self, home: Path) -> None:
        nested = home / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "leaf.md").write_text("x")

        assert [r.path for r in search_tree(home, "leaf")] == ["a/b/leaf.md"]

    def test_file_alias_rejected_in_core(self, home: Path) -> None:
        with pytest.raises(ValueError):
            search_tree(home, "x", "file")  # type: ignore[arg-type]

    def test_empty_query(self, home: Path) -> None:
        assert search_tree(home, "") == []


class TestContentSearch:
    """Test content-mode search."""

    def test_scenario(self, home: Path) -> None:
        """Should find sub/deep.txt only."""
        results = search_tree(home, "findme", "content")

        assert len(results) == 1
        assert results[0].path == "sub/deep.txt"
        assert results[0].name == "deep.txt"
        assert results[0].type == "content"
        assert "findme" in results[0].match

    def test_hidden_file_contents_ignored(self, home: Path) -> None:
        (home / ".secret").write_text("findme")

        assert [r.path for r in search_tree(home, "findme", "content")] == ["sub/deep.txt"]

    def test_snippet_context(self, tmp_path: Path) -> None:
        (tmp_path / "long.txt").write_text("a" * 100 + "FindMe" + "b" * 100)

        results = search_tree(tmp_path, "findme", "content")

        assert results[0].match == "a" * 40 + "FindMe" + "b" * 40

    def test_large_files_skipped(self, tmp_path: Path) -> None:
        """Should silently skip files over 512 KiB."""
        (tmp_path / "big.txt").write_text("needle" + "x" * (512 * 1024))
        (tmp_path / "small.txt").write_text("needle")

        results = search_tree(tmp_path, "needle", "content")

        assert [r.name for r in results] == ["small.txt"]

    def test_file_at_limit_searched(self, tmp_path: Path) -> None:
        (tmp_path / "edge.txt").write_text("needle".ljust(64, "x"))

        results = search_tree(tmp_path, "needle", "content", max_file_bytes=64)

        assert [r.name for r in results] == ["edge.txt"]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires named pipes")
    def test_named_pipe_skipped(self, home: Path) -> None:
        """Should skip a FIFO instead of blocking on it."""
        os.mkfifo(home / "aaa_pipe")
        os.mkfifo(home / "sub" / "findme_pipe")

        results = search_tree(home, "findme", "content")

        assert [r.path for r in results] == ["sub/deep.txt"]

    def test_unreadable_file_skipped(self, tmp_path: Path) -> None:
        """Should continue past a file that fails to read."""
        (tmp_path / "a.txt").write_text("needle")
        (tmp_path / "b.txt").write_text("needle")
        original = Path.read_text

        def flaky(self: Path, *args, **kwargs) -> str:
            if self.name == "a.txt":
                raise PermissionError("denied")
            return original(self, *args, **kwargs)

        with patch.object(Path, "read_text", flaky):
            results = search_tree(tmp_path, "needle", "content")

        assert [r.name for r in results] == ["b.txt"]

    def test_symlink_outside_root_not_read(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside.txt"
        outside.write_text("needle")
        os.symlink(outside, root / "link.txt")

        assert search_tree(root.resolve(), "needle", "content") == []

    def test_symlinked_directory_not_descended(self, home: Path) -> None:
        os.symlink(home / "sub", home / "loop")

        results = search_tree(home, "findme", "content")

        assert [r.path for r in results] == ["sub/deep.txt"]


class TestTraversalBounds:
    """Test skip-list and result cap."""

    @pytest.mark.parametrize("skipped", ["node_modules", "todos", "debug", "session-env"])
    def test_skip_list(self, home: Path, skipped: str) -> None:
        directory = home / skipped
        directory.mkdir()
        (directory / "findme.txt").write_text("findme")

        assert search_tree(home, "findme") == []
        assert [r.path for r in search_tree(home, "findme", "content")] == ["sub/deep.txt"]

    def test_nested_skip_dir(self, home: Path) -> None:
        """Should skip by name at any depth."""
        nested = home / "sub" / "node_modules"
        nested.mkdir()
        (nested / "findme.js").write_text("x")

        assert search_tree(home, "findme") == []

    def test_result_cap(self, tmp_path: Path) -> None:
        """Should stop at 100 results."""
        for i in range(150):
            (tmp_path / f"match_{i}.txt").write_text("x")

        assert len(search_tree(tmp_path, "match")) == 100

    def test_cap_stops_walk(self, tmp_path: Path) -> None:
        """Should not enter further directories once the cap is reached."""
        for d in range(5):
            directory = tmp_path / f"d{d}"
            directory.mkdir()
            for i in range(3):
                (directory / f"hit_{i}.txt").write_text("x")

        searcher = TreeSearcher(tmp_path, max_results=4)
        with patch("homescope.explorer.search.os.scandir", wraps=os.scandir) as scandir:
            results = searcher.search("hit")

        assert len(results) == 4
        # root plus the two directories needed to collect four hits
        assert scandir.call_count == 3

    def test_content_result_cap(self, tmp_path: Path) -> None:
        """Should stop at the cap in content mode too."""
        for d in range(3):
            directory = tmp_path / f"d{d}"
            directory.mkdir()
            for i in range(10):
                (directory / f"f{i}.txt").write_text("the needle is here")

        results = search_tree(tmp_path, "needle", "content", max_results=12)

        assert len(results) == 12
        assert all(r.type == "content" for r in results)

    def test_custom_skip_dirs(self, home: Path) -> None:
        assert search_tree(home, "deep", skip_dirs={"sub"}) == []

    def test_unreadable_directory_skipped(self, home: Path) -> None:
        """Should keep walking when one directory fails to list."""
        other = home / "other"
        other.mkdir()
        (other / "deep_two.txt").write_text("x")
        original = os.scandir

        def flaky(path):
            if Path(path).name == "sub":
                raise PermissionError("denied")
            return original(path)

        with patch("homescope.explorer.search.os.scandir", side_effect=flaky):
            results = search_tree(home, "deep")

        assert [r.path for r in results] == ["other/deep_two.txt"]
