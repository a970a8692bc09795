"""Small, safe helpers to build compact body previews for log lines."""

from __future__ import annotations

__all__ = ["preview_text"]

_TRUNCATED = "... [TRUNCATED]"


def _truncate(s: str, limit: int) -> str:
    return s if len(s) <= limit else s[:limit] + _TRUNCATED


def preview_text(text: str, limit: int = 200) -> str:
    """Return a single-line, length-bounded preview of *text*.

    Newlines are collapsed so a preview never spans several log records.
    A limit of 0 disables previews entirely.
    """
    if limit <= 0:
        return ""
    flattened = " ".join(text.split())
    return _truncate(flattened, limit)
