"""Mine a document body for fenced code examples."""

from __future__ import annotations

import re

from apple_docs.core.logging import get_logger
from apple_docs.mining.context import extract_context_after, extract_context_before
from apple_docs.mining.repair import repair_code_format
from apple_docs.mining.rules import categorize, complexity_bucket, rejection_reason
from apple_docs.models.entities import CodeExample, Document

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "swift"

# opener and closer must each be a whole fence line; the info string may carry attributes
FENCED_BLOCK_RE = re.compile(r"^```([^\n`]*)\n(.*?)\n?^```[ \t]*$", re.MULTILINE | re.DOTALL)
_SYSTEM_API_MARKERS = ("Button", "Text", "List")


def count_code_blocks(content: str) -> int:
    return len(FENCED_BLOCK_RE.findall(content))


def first_code_block(content: str) -> str | None:
    match = FENCED_BLOCK_RE.search(content)
    return match.group(2).strip() if match else None


def fence_language(info: str) -> str:
    """First token of a fence info string (```swift title="A.swift"``` -> swift)."""
    tokens = info.split()
    return tokens[0].lower() if tokens else DEFAULT_LANGUAGE


def extract_code_examples(document: Document) -> list[CodeExample]:
    """One example per valid fenced block, in document order."""
    content = document.content
    examples: list[CodeExample] = []
    for match in FENCED_BLOCK_RE.finditer(content):
        original = match.group(2).strip()
        offset = match.start()
        context_before = extract_context_before(content, offset)
        context_after = extract_context_after(content, match.end())
        context = f"{context_before} {context_after}"

        code = repair_code_format(original)
        reason = rejection_reason(code, context)
        if reason is not None:
            logger.debug("Skipping block at %d in %s: %s", offset, document.id, reason)
            continue

        examples.append(
            CodeExample(
                id=f"{document.id}_{offset}",
                document_id=document.id,
                document_title=document.title,
                document_url=document.url,
                code=code,
                original_code=original,
                language=fence_language(match.group(1)),
                lines=len(code.split("\n")),
                context_before=context_before,
                context_after=context_after,
                purpose="Example" if "example" in context_before else "Usage",
                complexity=complexity_bucket(code),
                category=categorize(code, document.title, context),
                has_comments="//" in code,
                uses_system_api=["SwiftUI"] if any(marker in code for marker in _SYSTEM_API_MARKERS) else [],
            )
        )
    return examples


__all__ = [
    "FENCED_BLOCK_RE",
    "count_code_blocks",
    "first_code_block",
    "fence_language",
    "extract_code_examples",
]
