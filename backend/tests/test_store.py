"""Tests for the read-only document store."""

import sqlite3
from pathlib import Path

import pytest

from apple_docs.core.errors import StoreUnavailable
from apple_docs.db.sqlite import SQLiteDatabase
from apple_docs.db.store import DATABASE_FILENAME, DocumentStore, resolve_database_path

from conftest import make_document


def _records():
    return [
        (make_document("a", platforms=["iOS", "macOS"], technologies=["SwiftUI"]), [1.0, 0.0]),
        (make_document("b"), [0.0, 1.0]),
        (make_document("c"), None),
    ]


def test_fetch_embedded_skips_documents_without_vectors(corpus_store) -> None:
    store = corpus_store(_records())
    items = store.fetch_embedded()
    assert [item.document.id for item in items] == ["a", "b"]
    assert items[0].vector == [1.0, 0.0]
    assert items[0].document.platforms == ["iOS", "macOS"]
    assert items[0].document.technologies == ["SwiftUI"]


def test_fetch_embedded_filters(corpus_store) -> None:
    store = corpus_store(_records())
    assert [item.document.id for item in store.fetch_embedded(ids=["b", "c"])] == ["b"]
    assert [item.document.id for item in store.fetch_embedded(exclude_ids=["a"])] == ["b"]
    assert store.fetch_embedded(ids=[]) == []


def test_document_lookup(corpus_store) -> None:
    store = corpus_store(_records())
    assert store.get_document("c").title == "Document c"
    assert store.get_document("missing") is None
    assert {doc.id for doc in store.get_documents(["a", "c", "missing"])} == {"a", "c"}
    assert store.count_documents() == 3
    assert len(store.sample_titles(2)) == 2


def test_fetch_vectors(corpus_store) -> None:
    store = corpus_store(_records())
    assert dict(store.fetch_vectors(["a", "c"])) == {"a": [1.0, 0.0]}


def test_malformed_tags_decode_to_empty_list(corpus_store) -> None:
    store = corpus_store([(make_document("a"), [1.0, 0.0])])
    store.db.close()
    writer = SQLiteDatabase(store.db.db_path, read_only=False)
    writer.connect()
    writer.execute("UPDATE documents SET platforms = ? WHERE id = ?", ["not json", "a"])
    writer.commit()
    writer.close()
    store.db.connect()
    assert store.get_document("a").platforms == []


def test_closed_store_is_unavailable(corpus_store) -> None:
    store = corpus_store(_records())
    store.db.close()
    with pytest.raises(StoreUnavailable):
        store.fetch_embedded()
    with pytest.raises(StoreUnavailable):
        store.get_document("a")


def test_missing_read_only_database(tmp_path: Path) -> None:
    db = SQLiteDatabase(tmp_path / "nope.db")
    with pytest.raises(StoreUnavailable):
        db.connect()
    assert DocumentStore(db).db.is_open is False


def test_read_only_handle_rejects_writes(corpus_store) -> None:
    store = corpus_store(_records())
    with pytest.raises(sqlite3.OperationalError):
        store.db.execute("DELETE FROM documents")


def test_resolve_database_path_falls_back_to_package_dir(tmp_path: Path) -> None:
    package_dir = tmp_path / "pkg"
    package_dir.mkdir()
    (package_dir / DATABASE_FILENAME).write_bytes(b"")
    configured = tmp_path / "configured.db"
    assert resolve_database_path(configured, package_dir=package_dir) == package_dir / DATABASE_FILENAME

    configured.write_bytes(b"")
    assert resolve_database_path(configured, package_dir=package_dir) == configured
