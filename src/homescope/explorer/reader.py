"""Size-limited file reading with tail pagination for JSONL logs."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from homescope.config import MAX_FILE_BYTES
from homescope.errors import BadRequestError, NotFoundError, TooLargeError
from homescope.models import FileView, mtime_to_datetime
from homescope.utils.files import detect_content_type
from homescope.utils.text import tail_lines

LOGGER = logging.getLogger(__name__)

PAGINATED_CONTENT_TYPES = frozenset({"jsonl"})


def read_file(
    path: Path,
    *,
    display_path: str | None = None,
    tail: int = 0,
    max_bytes: int = MAX_FILE_BYTES,
) -> FileView:
    """Read a text file that has already been resolved inside the root.

    The size ceiling is checked from metadata before any content is loaded.
    For ``jsonl`` files a positive ``tail`` keeps only the last ``tail``
    non-empty lines; other content types are returned whole.
    """
    try:
        st = path.stat()
    except OSError as exc:
        LOGGER.debug("Cannot stat %s: %s", path, exc)
        raise NotFoundError("File not found") from exc

    if stat.S_ISDIR(st.st_mode):
        raise BadRequestError("Is a directory")
    if not stat.S_ISREG(st.st_mode):
        raise BadRequestError("Not a regular file")
    if st.st_size > max_bytes:
        raise TooLargeError(st.st_size)

    content_type = detect_content_type(path.suffix)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        LOGGER.debug("Cannot read %s: %s", path, exc)
        raise NotFoundError("File not found") from exc

    truncated = False
    if content_type in PAGINATED_CONTENT_TYPES and tail > 0:
        content, truncated = tail_lines(content, tail)

    return FileView(
        path=display_path if display_path is not None else str(path),
        content_type=content_type,
        content=content,
        size=st.st_size,
        modified=mtime_to_datetime(st.st_mtime),
        truncated=truncated,
    )
