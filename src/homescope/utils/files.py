"""Utility helpers for working with files under the browsed root."""

from __future__ import annotations

import os
from pathlib import Path

from homescope.errors import BadRequestError, ForbiddenError
from homescope.models import ContentType

PARENT_TOKEN = ".."

TEXT_EXTENSIONS = frozenset(
    {
        ".ts",
        ".js",
        ".py",
        ".sh",
        ".txt",
        ".yaml",
        ".yml",
        ".toml",
        ".css",
        ".html",
        ".log",
        ".env",
        ".gitignore",
    }
)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def is_within_root(root: Path, candidate: str | os.PathLike[str]) -> bool:
    """Return True when ``candidate`` equals ``root`` or sits below it.

    Compares path segments, so a root of ``/a/b`` does not contain ``/a/bc``.
    """
    return Path(candidate).is_relative_to(root)


def resolve_path(root: Path, relative: str) -> Path:
    """Resolve an untrusted relative path against ``root``.

    Raises ``ForbiddenError`` when the input contains a parent-directory
    token or when the canonical result lies outside ``root``. Nothing on
    disk is opened; only ``realpath`` is consulted to follow symlinks.
    """
    if PARENT_TOKEN in relative:
        raise ForbiddenError()
    if "\0" in relative:
        raise BadRequestError("Invalid path: contains null byte")

    resolved = os.path.realpath(os.path.join(root, relative))
    if not is_within_root(root, resolved):
        raise ForbiddenError()
    return Path(resolved)


def detect_content_type(extension: str) -> ContentType:
    """Map a file extension (with leading dot) to a rendering hint."""
    if extension == ".md":
        return "markdown"
    if extension == ".json":
        return "json"
    if extension == ".jsonl":
        return "jsonl"
    if extension in TEXT_EXTENSIONS:
        return "text"
    return "text"
