"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel, Field, field_validator

MAX_BATCH_DOCUMENTS = 10


class SearchRequest(BaseModel):
    query: str = Field(min_length=1, description="2-4 specific keywords work best")
    # unset values fall back to the configured search defaults
    limit: int | None = Field(default=None, ge=1, le=100)
    min_similarity: float | None = Field(default=None, ge=-1.0, le=1.0)
    include_content: bool = True
    max_content_chars: int = Field(default=300, ge=1)
    include_related: bool = True
    show_code_preview: bool = False


class PlatformSummary(BaseModel):
    supported: list[str]
    scope: str


class TechnologySummary(BaseModel):
    primary: str
    modern: str | None = None


class CompatibilitySummary(BaseModel):
    platforms: PlatformSummary | None = None
    technologies: TechnologySummary | None = None
    requirements: dict[str, Any] | None = None
    limitations: list[dict[str, str]] | None = None


class DeprecationNotice(BaseModel):
    status: str
    confidence: str
    evidence: str


class SearchHit(BaseModel):
    id: str
    title: str
    url: str
    similarity: float = Field(description="Percentage, two decimals")
    snippet: str | None = None
    code_preview: str | None = None
    compatibility: CompatibilitySummary | None = None
    deprecation_warning: DeprecationNotice | None = None


class RelatedHit(BaseModel):
    id: str
    title: str
    url: str
    similarity: float
    relationship: str
    icon: str
    snippet: str | None = None


class SearchResponse(BaseModel):
    query: str
    total: int
    results: list[SearchHit]
    related_documents: list[RelatedHit] | None = None
    coverage: str | None = None
    total_with_related: int | None = None
    related_error: str | None = None


class DocumentsRequest(BaseModel):
    ids: list[str] = Field(min_length=1, max_length=MAX_BATCH_DOCUMENTS)

    @field_validator("ids", mode="before")
    @classmethod
    def _decode_json_array(cls, value: Any) -> Any:
        """Accept a JSON-encoded array string as well as a list."""
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("[") and stripped.endswith("]"):
                try:
                    return orjson.loads(stripped)
                except orjson.JSONDecodeError:
                    return [value]
            return [value]
        return value


class DocumentPayload(BaseModel):
    id: str
    title: str
    url: str
    type: str | None = None
    content: str
    content_length: int
    code_blocks: int


class DocumentsResponse(BaseModel):
    found: int
    documents: list[DocumentPayload] = Field(default_factory=list)
    error: str | None = None
    requested_ids: list[str] | None = None


class CodeExamplePayload(BaseModel):
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
    uses_system_api: list[str]


class CodeExamplesResponse(BaseModel):
    doc_id: str
    total: int
    examples: list[CodeExamplePayload]


class StatsResponse(BaseModel):
    database: str
    total_documents: int
    model: str
    dimensions: int
    sample_titles: list[str]


__all__ = [
    "SearchRequest",
    "SearchHit",
    "RelatedHit",
    "SearchResponse",
    "CompatibilitySummary",
    "PlatformSummary",
    "TechnologySummary",
    "DeprecationNotice",
    "DocumentsRequest",
    "DocumentPayload",
    "DocumentsResponse",
    "CodeExamplePayload",
    "CodeExamplesResponse",
    "StatsResponse",
    "MAX_BATCH_DOCUMENTS",
]
