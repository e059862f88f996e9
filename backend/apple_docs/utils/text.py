"""Text processing helpers."""

from __future__ import annotations

import re

TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
BLANK_RUN_RE = re.compile(r"\n{3,}")



def clean_content(text: str) -> str:
    """Drop trailing spaces and runs of blank lines, keeping markdown structure."""
    if not text:
        return ""
    cleaned = TRAILING_SPACE_RE.sub("\n", text)
    return BLANK_RUN_RE.sub("\n\n", cleaned).strip()


def truncate(text: str, max_chars: int) -> str:
    if len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


__all__ = ["clean_content", "truncate"]
