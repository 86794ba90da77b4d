"""Text helpers for tail pagination and match snippets."""

from __future__ import annotations

SNIPPET_CONTEXT_CHARS = 40


def non_empty_lines(text: str) -> list[str]:
    """Split on newlines and drop blank lines."""
    return [line for line in text.split("\n") if line.strip()]


def tail_lines(text: str, count: int) -> tuple[str, bool]:
    """Keep the last ``count`` non-empty lines of ``text``.

    Returns ``(content, truncated)`` where ``truncated`` is True when leading
    lines were dropped. Kept lines stay in their original order.
    """
    lines = non_empty_lines(text)
    truncated = len(lines) > count
    return "\n".join(lines[-count:]), truncated


def find_snippet(text: str, query: str, *, context: int = SNIPPET_CONTEXT_CHARS) -> str | None:
    """Return the first case-insensitive occurrence of ``query`` with surrounding context.

    Context is clipped at the start and end of ``text``. Returns None when
    there is no match.
    """
    index = text.lower().find(query.lower())
    if index < 0:
        return None
    start = max(0, index - context)
    end = min(len(text), index + len(query) + context)
    return text[start:end]
