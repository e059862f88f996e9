"""Read-only access to documents and their stored embeddings."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable, Sequence

import orjson

from apple_docs.core.errors import StoreUnavailable
from apple_docs.core.logging import get_logger
from apple_docs.db.sqlite import SQLiteDatabase
from apple_docs.models.entities import Document, EmbeddedDocument
from apple_docs.retrieval.vectors import decode_vector

logger = get_logger(__name__)

DATABASE_FILENAME = "embeddings.db"

_DOCUMENT_COLUMNS = "d.id, d.title, d.url, d.content, d.type, d.description, d.platforms, d.technologies"


class DocumentStore:
    """Pure data access over the ``documents`` and ``embeddings`` tables."""

    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def fetch_embedded(
        self,
        ids: Sequence[str] | None = None,
        exclude_ids: Iterable[str] | None = None,
    ) -> list[EmbeddedDocument]:
        """Return documents joined with their vectors in store row order."""
        self._require_open()
        clauses: list[str] = []
        params: list[str] = []
        if ids is not None:
            if not ids:
                return []
            clauses.append(f"d.id IN ({_placeholders(ids)})")
            params.extend(ids)
        excluded = list(exclude_ids or [])
        if excluded:
            clauses.append(f"d.id NOT IN ({_placeholders(excluded)})")
            params.extend(excluded)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self.db.query(
            f"""
            SELECT {_DOCUMENT_COLUMNS}, e.embedding
            FROM documents d
            JOIN embeddings e ON d.id = e.id{where}
            ORDER BY d.rowid
            """,
            params,
        )
        return [
            EmbeddedDocument(document=_row_to_document(row), vector=decode_vector(row["embedding"]))
            for row in rows
        ]

    def fetch_vectors(self, ids: Sequence[str]) -> list[tuple[str, list[float]]]:
        self._require_open()
        if not ids:
            return []
        rows = self.db.query(
            f"SELECT id, embedding FROM embeddings WHERE id IN ({_placeholders(ids)})",
            list(ids),
        )
        return [(row["id"], decode_vector(row["embedding"])) for row in rows]

    def get_document(self, document_id: str) -> Document | None:
        self._require_open()
        row = self.db.query_one(f"SELECT {_DOCUMENT_COLUMNS} FROM documents d WHERE d.id = ?", [document_id])
        return _row_to_document(row) if row else None

    def get_documents(self, ids: Sequence[str]) -> list[Document]:
        self._require_open()
        if not ids:
            return []
        rows = self.db.query(
            f"SELECT {_DOCUMENT_COLUMNS} FROM documents d WHERE d.id IN ({_placeholders(ids)})",
            list(ids),
        )
        return [_row_to_document(row) for row in rows]

    def count_documents(self) -> int:
        self._require_open()
        row = self.db.query_one("SELECT COUNT(*) AS count FROM documents")
        return int(row["count"]) if row else 0

    def sample_titles(self, limit: int = 5) -> list[str]:
        self._require_open()
        rows = self.db.query("SELECT title FROM documents LIMIT ?", [limit])
        return [row["title"] for row in rows]

    def _require_open(self) -> None:
        if not self.db.is_open:
            raise StoreUnavailable("Document store is not open")


def resolve_database_path(configured: Path, package_dir: Path | None = None) -> Path:
    """Pick the first existing corpus file, falling back to the configured path."""
    package_dir = package_dir or Path(__file__).resolve().parents[1]
    candidates = [
        configured.expanduser(),
        package_dir / DATABASE_FILENAME,
        Path.cwd() / DATABASE_FILENAME,
    ]
    for candidate in candidates:
        if candidate.exists():
            logger.info("Found database at %s", candidate)
            return candidate
    logger.warning("Database not found. Using %s", configured)
    return configured.expanduser()


def _row_to_document(row: sqlite3.Row) -> Document:
    return Document(
        id=row["id"],
        title=row["title"] or "",
        url=row["url"] or "",
        content=row["content"] or "",
        type=row["type"],
        description=row["description"],
        platforms=_decode_tags(row["platforms"]),
        technologies=_decode_tags(row["technologies"]),
    )


def _decode_tags(raw: str | bytes | None) -> list[str]:
    if not raw:
        return []
    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _placeholders(values: Sequence[object]) -> str:
    return ",".join("?" for _ in values)


__all__ = ["DocumentStore", "resolve_database_path", "DATABASE_FILENAME"]
