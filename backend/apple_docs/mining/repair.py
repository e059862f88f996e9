"""Repair code blocks whose line breaks were flattened into commas."""

from __future__ import annotations

import re

PREVIEW_CHARS = 150
SHORT_PREVIEW_CHARS = 200

_STRUCTURAL_STAGE = (
    (re.compile(r"\{\s*,"), "{\n"),
    (re.compile(r",\s*\}"), "\n}"),
    (re.compile(r"\)\s*,\s*\{"), ") {\n"),
    (re.compile(r";\s*,"), ";\n"),
)

# widest indentation first so deep nesting keeps its whitespace
_INDENTATION_STAGE = (
    (re.compile(r",(\s{8,})"), r"\n\1"),
    (re.compile(r",(\s{4,7})"), r"\n\1"),
    (re.compile(r",(\s{2,3})"), r"\n\1"),
)

_BOUNDARY_STAGE = (
    (re.compile(r",\s*(let |var |func |class |struct |enum |import |@)"), r"\n\1"),
    (re.compile(r",\s*(\.[a-zA-Z])"), r"\n    \1"),
    (re.compile(r",\s*(\w+\()"), r"\n    \1"),
    (re.compile(r",\s*(\w+:)"), r"\n    \1"),
)

_CLEANUP_STAGE = (
    (re.compile(r"\n\s*,"), "\n"),
    (re.compile(r",\s*\n"), "\n"),
    (re.compile(r"\n{3,}"), "\n\n"),
)

STAGES = (_STRUCTURAL_STAGE, _INDENTATION_STAGE, _BOUNDARY_STAGE, _CLEANUP_STAGE)

_PREVIEW_SUBSTITUTIONS = (
    (re.compile(r"\{\s*,"), "{\n    "),
    (re.compile(r",\s*\}"), "\n}"),
    (re.compile(r",\s+"), ",\n    "),
    (re.compile(r"\}\s*,\s*\."), "\n}."),
)

_SPLIT_RE = re.compile(r"[,\n]")


def needs_repair(code: str) -> bool:
    """Flattened blocks have commas where newlines used to be and no newlines left."""
    return "," in code and "\n" not in code


def naive_repair(code: str) -> str:
    return code.replace(",", "\n").strip()


def repair_code_format(code: str) -> str:
    """Rebuild line breaks in a flattened block; no-op for well-formed code."""
    if not needs_repair(code):
        return code

    fixed = code
    for stage in STAGES:
        for pattern, replacement in stage:
            fixed = pattern.sub(replacement, fixed)
    fixed = fixed.strip()

    baseline_lines = len(_SPLIT_RE.split(code))
    fixed_lines = len(fixed.split("\n"))
    if fixed_lines < baseline_lines * 0.5:
        return naive_repair(code)
    return fixed


def format_code_preview(code: str) -> str:
    """Short preview of a block for search results."""
    preview = code.strip()
    if needs_repair(preview):
        if len(preview) < SHORT_PREVIEW_CHARS:
            for pattern, replacement in _PREVIEW_SUBSTITUTIONS:
                preview = pattern.sub(replacement, preview)
        else:
            preview = repair_code_format(preview)
    if len(preview) > PREVIEW_CHARS:
        return preview[:PREVIEW_CHARS] + "..."
    return preview


__all__ = ["needs_repair", "naive_repair", "repair_code_format", "format_code_preview"]
