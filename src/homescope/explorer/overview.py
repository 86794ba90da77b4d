"""Per-section counts and sizes for the root overview."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from homescope.models import KeyFileStat, SectionStat, mtime_to_datetime

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Section:
    key: str
    path: str
    label: str
    description: str


SECTIONS: tuple[Section, ...] = (
    Section("agents", "agents", "Agents", "Custom agent definitions"),
    Section("plans", "plans", "Plans", "Implementation plans"),
    Section("skills", "skills", "Skills", "Skill definitions"),
    Section("projects", "projects", "Projects", "Project-scoped configs"),
    Section("plugins", "plugins", "Plugins", "Installed plugins"),
    Section("hooks", "hooks", "Hooks", "Git/lifecycle hooks"),
    Section("commands", "commands", "Commands", "Custom commands"),
    Section("tasks", "tasks", "Tasks", "Task lists"),
    Section("teams", "teams", "Teams", "Team configurations"),
)

KEY_FILES: tuple[str, ...] = ("settings.json", "CLAUDE.md")


def section_stat(root: Path, section: Section) -> SectionStat:
    """Count a section's entries and sum their sizes. A missing section reports zeros."""
    stat = SectionStat(
        key=section.key,
        path=section.path,
        label=section.label,
        description=section.description,
    )
    directory = root / section.path
    try:
        names = os.listdir(directory)
    except OSError:
        return stat

    stat.count = len(names)
    for name in names:
        try:
            stat.total_size_bytes += (directory / name).stat().st_size
        except OSError as exc:
            LOGGER.debug("Cannot stat %s/%s: %s", directory, name, exc)
    return stat


def key_file_stat(root: Path, name: str) -> KeyFileStat:
    try:
        st = (root / name).stat()
    except OSError:
        return KeyFileStat(name=name)
    return KeyFileStat(name=name, size=st.st_size, modified=mtime_to_datetime(st.st_mtime))


def build_overview(
    root: Path,
    sections: Sequence[Section] = SECTIONS,
    key_files: Sequence[str] = KEY_FILES,
) -> tuple[List[SectionStat], List[KeyFileStat]]:
    return (
        [section_stat(root, section) for section in sections],
        [key_file_stat(root, name) for name in key_files],
    )
