"""Heuristic relationship labels for related documents.

Rules are evaluated in order and the first matching predicate wins; the
last rule always matches, so every candidate gets exactly one label.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from apple_docs.models.entities import Relationship

_CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_TYPE_DECLARATION_RE = re.compile(r"\b(struct|class|protocol|enum)\s+\w+")

MIGRATION_TERMS = ("bringing", "migrat", "converting", "transition")
PERFORMANCE_TERMS = ("performance", "optimiz", "efficient", "faster")
SAMPLE_TERMS = ("sample", "demo", "example", "tutorial")
PLATFORM_TERMS = ("visionos", "macos", "ios", "tvos")

# (term in a main result title, term in the candidate title)
MODERN_ALTERNATIVES = (
    ("scenekit", "realitykit"),
    ("uikit", "swiftui"),
    ("core animation", "swiftui"),
)

# (term in the query, term in the candidate title)
LOW_LEVEL_ALTERNATIVES = (
    ("realitykit", "metal"),
    ("swiftui", "core animation"),
    ("core image", "metal"),
)


@dataclass(slots=True)
class RelationshipContext:
    """Lower-cased text a rule can inspect."""

    title: str
    content: str
    main_titles: list[str]
    query: str

    @classmethod
    def build(cls, title: str, content: str, main_titles: Sequence[str], query: str) -> "RelationshipContext":
        return cls(
            title=title.lower(),
            content=content.lower(),
            main_titles=[item.lower() for item in main_titles],
            query=query.lower(),
        )


Rule = tuple[Callable[[RelationshipContext], bool], Relationship]


def _title_has(terms: Sequence[str]) -> Callable[[RelationshipContext], bool]:
    return lambda ctx: any(term in ctx.title for term in terms)


def _is_modern_alternative(ctx: RelationshipContext) -> bool:
    return any(
        new in ctx.title and any(old in main for main in ctx.main_titles)
        for old, new in MODERN_ALTERNATIVES
    )


def _is_low_level_implementation(ctx: RelationshipContext) -> bool:
    return any(high in ctx.query and low in ctx.title for high, low in LOW_LEVEL_ALTERNATIVES)


def is_api_reference(content: str) -> bool:
    """Three or more fenced blocks, or at least two type declarations."""
    code_blocks = len(_CODE_BLOCK_RE.findall(content))
    declarations = len(_TYPE_DECLARATION_RE.findall(content))
    return code_blocks >= 3 or declarations >= 2


RELATIONSHIP_RULES: tuple[Rule, ...] = (
    (_title_has(MIGRATION_TERMS), Relationship.MIGRATION_GUIDE),
    (_is_modern_alternative, Relationship.MODERN_ALTERNATIVE),
    (_title_has(PERFORMANCE_TERMS), Relationship.PERFORMANCE_GUIDE),
    (_title_has(SAMPLE_TERMS), Relationship.CODE_EXAMPLE),
    (_is_low_level_implementation, Relationship.LOW_LEVEL_IMPLEMENTATION),
    (lambda ctx: is_api_reference(ctx.content), Relationship.API_REFERENCE),
    (_title_has(PLATFORM_TERMS), Relationship.PLATFORM_SPECIFIC),
    (lambda ctx: True, Relationship.RELATED_TOPIC),
)


def classify_relationship(
    title: str,
    content: str,
    main_titles: Sequence[str],
    query: str,
    rules: Sequence[Rule] = RELATIONSHIP_RULES,
) -> Relationship:
    ctx = RelationshipContext.build(title, content, main_titles, query)
    for predicate, relationship in rules:
        if predicate(ctx):
            return relationship
    return Relationship.RELATED_TOPIC


__all__ = [
    "RELATIONSHIP_RULES",
    "RelationshipContext",
    "classify_relationship",
    "is_api_reference",
]
