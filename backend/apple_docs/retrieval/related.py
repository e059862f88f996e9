"""Centroid-based discovery of documents related to a set of primary results."""

from __future__ import annotations

from typing import Sequence

from apple_docs.core.logging import get_logger
from apple_docs.db.store import DocumentStore
from apple_docs.models.entities import RelatedResult, ScoredResult
from apple_docs.retrieval.relationships import classify_relationship
from apple_docs.retrieval.vectors import centroid, cosine_similarity

logger = get_logger(__name__)

MAX_SEED_RESULTS = 3
MAX_CANDIDATES = 10
MAX_RELATED = 6


def adaptive_threshold(average_similarity: float) -> float:
    """Stricter cutoff when the primary results are strong, looser when weak."""
    if average_similarity > 0.6:
        return 0.48
    if average_similarity < 0.4:
        return 0.42
    return 0.45


def find_related(
    store: DocumentStore,
    top_results: Sequence[ScoredResult],
    original_query: str,
) -> list[RelatedResult]:
    if not top_results:
        return []
    seeds = list(top_results[:MAX_SEED_RESULTS])
    seed_ids = [result.id for result in seeds]
    vectors = [vector for _, vector in store.fetch_vectors(seed_ids)]
    if not vectors:
        logger.warning("No embeddings found for main results")
        return []

    center = centroid(vectors)
    average = sum(result.similarity for result in top_results) / len(top_results)
    threshold = adaptive_threshold(average)
    logger.info("Using related threshold %.2f (main avg %.1f%%)", threshold, average * 100)

    scored = []
    for item in store.fetch_embedded(exclude_ids=[result.id for result in top_results]):
        similarity = cosine_similarity(center, item.vector)
        if similarity >= threshold:
            scored.append((item.document, similarity))
    scored.sort(key=lambda pair: pair[1], reverse=True)

    main_titles = [result.title for result in seeds]
    related = [
        RelatedResult(
            document=document,
            similarity=similarity,
            relationship=classify_relationship(document.title, document.content, main_titles, original_query),
        )
        for document, similarity in scored[:MAX_CANDIDATES]
    ]
    logger.info("Found %d related documents", min(len(related), MAX_RELATED))
    return related[:MAX_RELATED]


__all__ = ["adaptive_threshold", "find_related", "MAX_SEED_RESULTS", "MAX_CANDIDATES", "MAX_RELATED"]
