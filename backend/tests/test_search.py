"""Tests for primary search and the similarity floor."""

import pytest

from apple_docs.core.errors import DocumentNotFound, EmbeddingRateLimited
from apple_docs.retrieval.search import SearchEngine, apply_similarity_floor, score_corpus

from conftest import StubEmbedder, make_document, unit_at

SIMILARITIES = [0.9, 0.6, 0.5, 0.2, 0.1]


@pytest.fixture
def engine(corpus_store) -> SearchEngine:
    records = [
        (
            make_document(f"doc-{idx}", platforms=["iOS"], technologies=["SwiftUI"]),
            unit_at(similarity),
        )
        for idx, similarity in enumerate(SIMILARITIES)
    ]
    return SearchEngine(corpus_store(records), StubEmbedder())


def test_search_applies_floor_in_descending_order(engine: SearchEngine) -> None:
    results = engine.search("swiftui", limit=10, min_similarity=0.3)
    assert [result.id for result in results] == ["doc-0", "doc-1", "doc-2"]
    assert [result.similarity for result in results] == pytest.approx([0.9, 0.6, 0.5], abs=1e-6)


def test_search_relaxes_floor_once_when_results_are_scarce(engine: SearchEngine) -> None:
    results = engine.search("swiftui", limit=10, min_similarity=0.55)
    # 0.55 keeps two hits; the relaxed floor 0.45 admits the third
    assert [result.id for result in results] == ["doc-0", "doc-1", "doc-2"]


def test_search_truncates_to_limit(engine: SearchEngine) -> None:
    results = engine.search("swiftui", limit=2, min_similarity=0.0)
    assert [result.id for result in results] == ["doc-0", "doc-1"]


def test_search_attaches_compatibility(engine: SearchEngine) -> None:
    result = engine.search("swiftui", limit=1)[0]
    assert result.compatibility is not None
    assert result.compatibility.platforms.mobile is True
    assert result.compatibility.technologies.is_modern is True


def test_search_empty_corpus(corpus_store) -> None:
    engine = SearchEngine(corpus_store([]), StubEmbedder())
    assert engine.search("anything") == []


def test_search_propagates_embedding_failure(engine: SearchEngine) -> None:
    class FailingEmbedder(StubEmbedder):
        def embed(self, text: str) -> list[float]:
            raise EmbeddingRateLimited("slow down")

    engine.embedder = FailingEmbedder()
    with pytest.raises(EmbeddingRateLimited):
        engine.search("swiftui")


def test_score_corpus_keeps_corpus_order_on_ties(corpus_store) -> None:
    store = corpus_store(
        [
            (make_document("first"), [1.0, 0.0]),
            (make_document("second"), [2.0, 0.0]),
            (make_document("best"), [1.0, 1.0]),
        ]
    )
    ranked = score_corpus([1.0, 1.0], store.fetch_embedded())
    assert [item.document.id for item, _ in ranked] == ["best", "first", "second"]


def test_apply_similarity_floor_relaxes_at_most_once() -> None:
    ranked = [("a", 0.35), ("b", 0.1)]
    hits, relaxed = apply_similarity_floor(ranked, limit=10, min_similarity=0.5)
    assert relaxed == pytest.approx(0.4)
    assert hits == []


def test_apply_similarity_floor_never_relaxes_below_minimum() -> None:
    ranked = [("a", 0.25), ("b", 0.21)]
    hits, relaxed = apply_similarity_floor(ranked, limit=10, min_similarity=0.25)
    assert relaxed == pytest.approx(0.2)
    assert [name for name, _ in hits] == ["a", "b"]

    hits, relaxed = apply_similarity_floor(ranked, limit=10, min_similarity=0.2)
    assert relaxed is None
    assert len(hits) == 2


def test_apply_similarity_floor_small_limit_needs_fewer_results() -> None:
    hits, relaxed = apply_similarity_floor([("a", 0.9), ("b", 0.1)], limit=1, min_similarity=0.5)
    assert relaxed is None
    assert hits == [("a", 0.9)]


def test_extract_code_from_unknown_document(engine: SearchEngine) -> None:
    with pytest.raises(DocumentNotFound):
        engine.extract_code_from_document("missing")


def test_get_stats(engine: SearchEngine) -> None:
    stats = engine.get_stats()
    assert stats.total_documents == len(SIMILARITIES)
    assert len(stats.sample_titles) == 5
