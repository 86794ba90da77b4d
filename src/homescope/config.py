"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ROOT_ENV_VAR = "HOMESCOPE_ROOT"

MAX_FILE_BYTES = 2 * 1024 * 1024
MAX_SEARCH_FILE_BYTES = 512 * 1024
MAX_SEARCH_RESULTS = 100
DEFAULT_SKIP_DIRS = frozenset({"todos", "debug", "session-env", "node_modules", ".git"})


def _get_default_root() -> Path:
    """Get the browsed root from the environment, falling back to ``~/.claude``."""
    configured = os.environ.get(ROOT_ENV_VAR)
    if configured:
        return Path(configured)
    return Path.home() / ".claude"


def canonical_root(root: Path | str) -> Path:
    """Expand ``~`` and resolve symlinks so containment checks compare like with like."""
    return Path(os.path.realpath(os.path.expanduser(str(root))))


@dataclass(frozen=True, slots=True)
class AppConfig:
    root: Path = field(default_factory=_get_default_root)
    max_file_bytes: int = MAX_FILE_BYTES
    max_search_file_bytes: int = MAX_SEARCH_FILE_BYTES
    max_results: int = MAX_SEARCH_RESULTS
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", canonical_root(self.root))
