"""Shape engine results into API payloads."""

from __future__ import annotations

from dataclasses import asdict

from apple_docs.mining.extractor import count_code_blocks, first_code_block
from apple_docs.mining.repair import format_code_preview
from apple_docs.models.dto import (
    CodeExamplePayload,
    CompatibilitySummary,
    DeprecationNotice,
    DocumentPayload,
    PlatformSummary,
    RelatedHit,
    SearchHit,
    TechnologySummary,
)
from apple_docs.models.entities import CodeExample, Compatibility, Document, RelatedResult, ScoredResult
from apple_docs.utils.text import clean_content, truncate

RELATED_SNIPPET_CHARS = 150

_DEPRECATION_LABELS = {
    "deprecated": "Deprecated API",
    "superseded": "Has Modern Alternative",
}


def as_percentage(similarity: float) -> float:
    return round(similarity * 100, 2)


def search_hit(
    result: ScoredResult,
    include_content: bool,
    max_content_chars: int,
    show_code_preview: bool,
) -> SearchHit:
    content = clean_content(result.document.content)
    hit = SearchHit(
        id=result.document.id,
        title=result.document.title,
        url=result.document.url,
        similarity=as_percentage(result.similarity),
        snippet=truncate(content, max_content_chars) if include_content else None,
    )
    if show_code_preview:
        code = first_code_block(content)
        if code:
            hit.code_preview = format_code_preview(code)
    if result.compatibility is not None:
        hit.compatibility = compatibility_summary(result.compatibility)
        deprecation = result.compatibility.deprecation
        if deprecation is not None:
            hit.deprecation_warning = DeprecationNotice(
                status=_DEPRECATION_LABELS.get(deprecation.status, "Migration Available"),
                confidence=deprecation.confidence,
                evidence=deprecation.evidence,
            )
    return hit


def compatibility_summary(compat: Compatibility) -> CompatibilitySummary:
    summary = CompatibilitySummary()
    platforms = compat.platforms
    if platforms.count > 0:
        summary.platforms = PlatformSummary(supported=platforms.supported, scope=_platform_scope(compat))
    technologies = compat.technologies
    if technologies.primary:
        modern = None
        if technologies.is_modern:
            modern = "Modern (SwiftUI)"
        elif technologies.is_legacy:
            modern = "Legacy (UIKit)"
        summary.technologies = TechnologySummary(primary=technologies.primary, modern=modern)
    if compat.requirements:
        summary.requirements = compat.requirements
    if compat.limitations:
        summary.limitations = compat.limitations
    return summary


def _platform_scope(compat: Compatibility) -> str:
    platforms = compat.platforms
    if platforms.universal:
        return "Universal"
    if platforms.mobile:
        return "Mobile"
    if platforms.desktop:
        return "Desktop"
    if platforms.spatial:
        return "Spatial"
    return "Limited"


def related_hit(result: RelatedResult, include_content: bool) -> RelatedHit:
    content = clean_content(result.document.content)
    return RelatedHit(
        id=result.document.id,
        title=result.document.title,
        url=result.document.url,
        similarity=as_percentage(result.similarity),
        relationship=result.relationship.value,
        icon=result.relationship.icon,
        snippet=truncate(content, RELATED_SNIPPET_CHARS) if include_content else None,
    )


def document_payload(document: Document) -> DocumentPayload:
    content = clean_content(document.content)
    return DocumentPayload(
        id=document.id,
        title=document.title,
        url=document.url,
        type=document.type,
        content=content,
        content_length=len(content),
        code_blocks=count_code_blocks(content),
    )


def code_example_payload(example: CodeExample) -> CodeExamplePayload:
    return CodeExamplePayload(**asdict(example))


__all__ = [
    "as_percentage",
    "search_hit",
    "compatibility_summary",
    "related_hit",
    "document_payload",
    "code_example_payload",
]
