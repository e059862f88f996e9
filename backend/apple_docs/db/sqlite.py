"""SQLite management utilities."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

from apple_docs.core.errors import StoreUnavailable

READ_ONLY_PRAGMAS = (
    "PRAGMA query_only=ON;",
    "PRAGMA temp_store=MEMORY;",
)

# rollback journal keeps the corpus a single file that read-only handles can open
WRITABLE_PRAGMAS = (
    "PRAGMA journal_mode=DELETE;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA temp_store=MEMORY;",
)


class SQLiteDatabase:
    """Thin wrapper around sqlite3; read-only unless asked otherwise.

    The connection is shared across threads (``check_same_thread=False``);
    callers serialise access through ``apple_docs.core.gate.OperationGate``.
    """

    def __init__(self, db_path: Path, read_only: bool = True) -> None:
        self.db_path = Path(db_path).expanduser()
        self.read_only = read_only
        self._connection: sqlite3.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def connect(self) -> sqlite3.Connection:
        if self._connection is None:
            if self.read_only:
                if not self.db_path.exists():
                    raise StoreUnavailable(f"Database not found at {self.db_path}")
                uri = f"file:{self.db_path}?mode=ro"
                connection = sqlite3.connect(uri, uri=True, check_same_thread=False)
                pragmas = READ_ONLY_PRAGMAS
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                connection = sqlite3.connect(self.db_path, check_same_thread=False)
                pragmas = WRITABLE_PRAGMAS
            connection.row_factory = sqlite3.Row
            for pragma in pragmas:
                connection.execute(pragma)
            self._connection = connection
        return self._connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the open connection without opening one implicitly."""
        if self._connection is None:
            raise StoreUnavailable("Document store is not open")
        return self._connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "SQLiteDatabase":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        self.close()

    def commit(self) -> None:
        if self._connection is not None:
            self._connection.commit()

    def rollback(self) -> None:
        if self._connection is not None:
            self._connection.rollback()

    def executescript(self, script: str) -> None:
        self.connection.executescript(script)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> sqlite3.Cursor:
        return self.connection.execute(sql, params or [])

    def executemany(self, sql: str, seq_of_params: Iterable[Sequence[Any]]) -> sqlite3.Cursor:
        return self.connection.executemany(sql, seq_of_params)

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[sqlite3.Row]:
        cursor = self.execute(sql, params)
        return cursor.fetchall()

    def query_one(self, sql: str, params: Sequence[Any] | None = None) -> sqlite3.Row | None:
        return self.execute(sql, params).fetchone()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        conn = self.connection
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()

    def ensure_schema(self, schema_sql: str | None = None) -> None:
        """Create the corpus tables; only meaningful on a writable handle."""
        if schema_sql is None:
            schema_path = Path(__file__).with_name("schema.sql")
            schema_sql = schema_path.read_text(encoding="utf-8")
        self.executescript(schema_sql)


__all__ = ["SQLiteDatabase"]
