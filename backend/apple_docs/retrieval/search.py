"""Search orchestration over the read-only documentation corpus."""

from __future__ import annotations

from typing import Sequence, TypeVar

from apple_docs.core.config import Settings
from apple_docs.core.errors import DocumentNotFound
from apple_docs.core.logging import get_logger
from apple_docs.core.metrics import CORPUS_SIZE, SEARCH_RELAXATIONS
from apple_docs.db.sqlite import SQLiteDatabase
from apple_docs.db.store import DocumentStore, resolve_database_path
from apple_docs.embedding.providers import EmbeddingProvider, get_embedding_provider
from apple_docs.mining.extractor import extract_code_examples
from apple_docs.models.entities import (
    CodeExample,
    CorpusStats,
    Document,
    EmbeddedDocument,
    RelatedResult,
    ScoredResult,
)
from apple_docs.retrieval.compatibility import CompatibilityAnalyzer
from apple_docs.retrieval.related import find_related
from apple_docs.retrieval.vectors import cosine_similarity

logger = get_logger(__name__)

T = TypeVar("T")

RELAXED_FLOOR = 0.2
RELAX_STEP = 0.1
MIN_EXPECTED_RESULTS = 3


def score_corpus(query_vector: Sequence[float], corpus: Sequence[EmbeddedDocument]) -> list[tuple[EmbeddedDocument, float]]:
    """Cosine-score every document; stable descending sort keeps corpus order on ties."""
    scored = [(item, cosine_similarity(query_vector, item.vector)) for item in corpus]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def apply_similarity_floor(
    ranked: Sequence[tuple[T, float]],
    limit: int,
    min_similarity: float,
) -> tuple[list[tuple[T, float]], float | None]:
    """Filter a ranked list by the floor, relaxing it at most once.

    Returns the truncated hits and the relaxed floor, or None when the
    original floor was kept.
    """
    kept = [pair for pair in ranked if pair[1] >= min_similarity]
    relaxed: float | None = None
    if len(kept) < min(MIN_EXPECTED_RESULTS, limit) and min_similarity > RELAXED_FLOOR:
        relaxed = max(RELAXED_FLOOR, min_similarity - RELAX_STEP)
        kept = [pair for pair in ranked if pair[1] >= relaxed]
    return kept[:limit], relaxed


class SearchEngine:
    """Dense retrieval, related-document discovery, and code mining over one store."""

    def __init__(
        self,
        store: DocumentStore,
        embedder: EmbeddingProvider,
        compatibility: CompatibilityAnalyzer | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.compatibility = compatibility or CompatibilityAnalyzer()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchEngine":
        db = SQLiteDatabase(resolve_database_path(settings.db_path), read_only=True)
        db.connect()
        engine = cls(
            store=DocumentStore(db),
            embedder=get_embedding_provider(settings),
            compatibility=CompatibilityAnalyzer(cache_size=settings.compatibility_cache_size),
        )
        logger.info("Search engine initialised (%s, %s)", db.db_path, engine.embedder.model_name)
        return engine

    def search(self, query: str, limit: int = 10, min_similarity: float = 0.3) -> list[ScoredResult]:
        query_vector = self.embedder.embed(query)
        ranked = score_corpus(query_vector, self.store.fetch_embedded())
        hits, relaxed = apply_similarity_floor(ranked, limit, min_similarity)
        if relaxed is not None:
            SEARCH_RELAXATIONS.inc()
            logger.warning("Few results with threshold %.2f. Relaxed to %.2f.", min_similarity, relaxed)
        return [
            ScoredResult(
                document=item.document,
                similarity=similarity,
                compatibility=self.compatibility.analyze(item.document),
            )
            for item, similarity in hits
        ]

    def find_related_documents(self, top_results: Sequence[ScoredResult], original_query: str) -> list[RelatedResult]:
        return find_related(self.store, top_results, original_query)

    def extract_code_from_document(self, document_id: str) -> list[CodeExample]:
        document = self.store.get_document(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        examples = extract_code_examples(document)
        logger.info("Extracted %d code examples from %s", len(examples), document.title)
        return examples

    def get_document(self, document_id: str) -> Document | None:
        return self.store.get_document(document_id)

    def get_documents(self, ids: Sequence[str]) -> list[Document]:
        return self.store.get_documents(ids)

    def get_stats(self) -> CorpusStats:
        total = self.store.count_documents()
        CORPUS_SIZE.set(total)
        return CorpusStats(total_documents=total, sample_titles=self.store.sample_titles(5))

    def close(self) -> None:
        self.store.db.close()
        logger.info("Search engine closed")


__all__ = ["SearchEngine", "score_corpus", "apply_similarity_floor"]
