"""Prose surrounding a code block, cut at sentence or paragraph boundaries."""

from __future__ import annotations

import re

BEFORE_CHARS = 200
AFTER_CHARS = 150
MIN_PARAGRAPH_CHARS = 50
MIN_SENTENCE_CHARS = 10

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]\s+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_FIRST_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]")
_LEADING_NON_WORD_RE = re.compile(r"^\W+")
_AFTER_BREAKS = ("\n\n", "\n```", "## ")


def extract_context_before(content: str, start: int, max_chars: int = BEFORE_CHARS) -> str:
    """Last one or two full sentences before ``start``, else the last paragraph."""
    window = content[max(0, start - max_chars) : start]

    sentences = _SENTENCE_SPLIT_RE.split(window)
    if len(sentences) > 1:
        tail = [sentence for sentence in sentences[-2:] if len(sentence.strip()) > MIN_SENTENCE_CHARS]
        if tail:
            return ". ".join(tail).strip()

    paragraphs = _PARAGRAPH_SPLIT_RE.split(window)
    if len(paragraphs) > 1:
        last = paragraphs[-1].strip()
        if len(last) >= MIN_PARAGRAPH_CHARS:
            return last

    return _LEADING_NON_WORD_RE.sub("", window.strip())


def extract_context_after(content: str, end: int, max_chars: int = AFTER_CHARS) -> str:
    """First sentence after ``end``, else text up to the nearest block break."""
    window = content[end : end + max_chars]

    sentence = _FIRST_SENTENCE_RE.match(window)
    if sentence:
        return sentence.group(0).strip()

    breaks = [pos for pos in (window.find(marker) for marker in _AFTER_BREAKS) if pos > 0]
    if breaks:
        return window[: min(breaks)].strip()

    if len(window) > 100:
        word_break = window.rfind(" ", 0, 101)
        if word_break > 50:
            return window[:word_break].strip() + "..."

    return window.strip()


__all__ = ["extract_context_before", "extract_context_after"]
