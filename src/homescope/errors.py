"""Error kinds raised by the explorer.

Every core operation either returns a complete result or raises exactly one
of these. The web layer maps them to HTTP responses through
``status_code``; the CLI prints the message and exits non-zero.
"""

from __future__ import annotations


class BrowseError(Exception):
    """Base for all explorer errors."""

    def __init__(self, message: str = "Unexpected error", *, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, object]:
        return {"detail": self.message}


class ForbiddenError(BrowseError):
    """Path escapes the browsed root (403)."""

    def __init__(self, message: str = "Invalid path") -> None:
        super().__init__(message, status_code=403)


class NotFoundError(BrowseError):
    """Missing or unreadable file or directory (404)."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message, status_code=404)


class BadRequestError(BrowseError):
    """Structurally invalid request (400)."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=400)


class TooLargeError(BrowseError):
    """File exceeds the read ceiling (413). Carries the actual size."""

    def __init__(self, size: int, message: str = "File too large") -> None:
        super().__init__(message, status_code=413)
        self.size = size

    def to_dict(self) -> dict[str, object]:
        return {"detail": self.message, "size": self.size}
