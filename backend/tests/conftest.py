"""Test fixtures for Apple Docs Search."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence

import orjson
import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from apple_docs.db.sqlite import SQLiteDatabase  # noqa: E402
from apple_docs.db.store import DocumentStore  # noqa: E402
from apple_docs.models.entities import Document  # noqa: E402
from apple_docs.retrieval.vectors import encode_vector  # noqa: E402

CorpusRecord = tuple[Document, Optional[Sequence[float]]]


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    for key in ("ADOCS_CONFIG", "OPENAI_API_KEY", "EMBEDDINGS_DB_PATH", "EMBEDDING_MODEL", "EMBEDDING_DIMENSIONS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ADOCS_DB_PATH", str(tmp_path / "missing.db"))

    from apple_docs.api import dependencies as deps
    from apple_docs.core.config import get_settings

    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._GATE = None
    deps._ENGINE = None
    yield
    if deps._GATE is not None:
        deps._GATE.shutdown(wait=True)
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._GATE = None
    deps._ENGINE = None


def unit_at(similarity: float) -> list[float]:
    """Unit vector whose cosine with ``[1, 0]`` is ``similarity``."""
    return [similarity, math.sqrt(max(0.0, 1.0 - similarity * similarity))]


def make_document(doc_id: str, title: str | None = None, content: str = "", **fields) -> Document:
    return Document(
        id=doc_id,
        title=title if title is not None else f"Document {doc_id}",
        url=f"https://developer.apple.com/documentation/{doc_id}",
        content=content or f"Body of {doc_id}.",
        **fields,
    )


def write_corpus(path: Path, records: Iterable[CorpusRecord]) -> None:
    """Create a corpus file; records without a vector get no embeddings row."""
    writer = SQLiteDatabase(path, read_only=False)
    writer.connect()
    writer.ensure_schema()
    with writer.transaction() as cursor:
        for document, vector in records:
            cursor.execute(
                """
                INSERT INTO documents (id, title, url, content, type, description, platforms, technologies)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    document.id,
                    document.title,
                    document.url,
                    document.content,
                    document.type,
                    document.description,
                    orjson.dumps(document.platforms).decode() if document.platforms else None,
                    orjson.dumps(document.technologies).decode() if document.technologies else None,
                ],
            )
            if vector is not None:
                cursor.execute(
                    "INSERT INTO embeddings (id, embedding) VALUES (?, ?)",
                    [document.id, encode_vector(vector)],
                )
    writer.close()


class StubEmbedder:
    """Returns canned vectors per query text."""

    def __init__(self, vectors: Mapping[str, Sequence[float]] | None = None, default: Sequence[float] = (1.0, 0.0)) -> None:
        self.model_name = "stub-embedding"
        self._vectors = dict(vectors or {})
        self._default = list(default)
        self.calls: list[str] = []

    @property
    def dim(self) -> int:
        return len(self._default)

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        return list(self._vectors.get(text, self._default))


@pytest.fixture
def corpus_store(tmp_path: Path) -> Callable[[Iterable[CorpusRecord]], DocumentStore]:
    """Factory building a read-only store over the given records."""
    opened: list[SQLiteDatabase] = []

    def _build(records: Iterable[CorpusRecord]) -> DocumentStore:
        path = tmp_path / f"corpus-{len(opened)}.db"
        write_corpus(path, records)
        db = SQLiteDatabase(path)
        db.connect()
        opened.append(db)
        return DocumentStore(db)

    yield _build
    for db in opened:
        db.close()
