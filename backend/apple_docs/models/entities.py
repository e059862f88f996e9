"""Internal dataclasses for corpus records and per-request results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(slots=True)
class Document:
    id: str
    title: str
    url: str
    content: str
    type: str | None = None
    description: str | None = None
    platforms: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)


@dataclass(slots=True)
class EmbeddedDocument:
    document: Document
    vector: list[float]


@dataclass(slots=True)
class PlatformInfo:
    supported: list[str] = field(default_factory=list)
    count: int = 0
    universal: bool = False
    mobile: bool = False
    desktop: bool = False
    spatial: bool = False
    watch: bool = False
    tv: bool = False


@dataclass(slots=True)
class TechnologyInfo:
    frameworks: list[str] = field(default_factory=list)
    primary: str | None = None
    is_modern: bool = False
    is_legacy: bool = False
    has_ai: bool = False
    has_ar: bool = False
    has_graphics: bool = False


@dataclass(slots=True)
class Deprecation:
    status: str
    evidence: str
    confidence: str


@dataclass(slots=True)
class Compatibility:
    platforms: PlatformInfo = field(default_factory=PlatformInfo)
    technologies: TechnologyInfo = field(default_factory=TechnologyInfo)
    requirements: dict[str, Any] = field(default_factory=dict)
    limitations: list[dict[str, str]] = field(default_factory=list)
    deprecation: Deprecation | None = None


@dataclass(slots=True)
class ScoredResult:
    document: Document
    similarity: float
    compatibility: Compatibility | None = None

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def title(self) -> str:
        return self.document.title


class Relationship(str, Enum):
    """How a related document connects to the primary results."""

    MIGRATION_GUIDE = "Migration Guide"
    MODERN_ALTERNATIVE = "Modern Alternative"
    PERFORMANCE_GUIDE = "Performance Guide"
    CODE_EXAMPLE = "Code Example"
    LOW_LEVEL_IMPLEMENTATION = "Low-Level Implementation"
    API_REFERENCE = "API Reference"
    PLATFORM_SPECIFIC = "Platform Specific"
    RELATED_TOPIC = "Related Topic"

    @property
    def icon(self) -> str:
        return _RELATIONSHIP_ICONS[self]


_RELATIONSHIP_ICONS = {
    Relationship.MIGRATION_GUIDE: "🔄",
    Relationship.MODERN_ALTERNATIVE: "🆕",
    Relationship.PERFORMANCE_GUIDE: "⚡",
    Relationship.CODE_EXAMPLE: "📋",
    Relationship.LOW_LEVEL_IMPLEMENTATION: "🔧",
    Relationship.API_REFERENCE: "📚",
    Relationship.PLATFORM_SPECIFIC: "🎯",
    Relationship.RELATED_TOPIC: "🔗",
}


@dataclass(slots=True)
class RelatedResult:
    document: Document
    similarity: float
    relationship: Relationship

    @property
    def id(self) -> str:
        return self.document.id


@dataclass(slots=True)
class CodeExample:
    id: str
    document_id: str
    document_title: str
    document_url: str
    code: str
    original_code: str
    language: str
    lines: int
    context_before: str
    context_after: str
    purpose: str
    complexity: str
    category: str
    has_comments: bool
    uses_system_api: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CorpusStats:
    total_documents: int
    sample_titles: list[str]


__all__ = [
    "Document",
    "EmbeddedDocument",
    "PlatformInfo",
    "TechnologyInfo",
    "Deprecation",
    "Compatibility",
    "ScoredResult",
    "Relationship",
    "RelatedResult",
    "CodeExample",
    "CorpusStats",
]
