"""SQLite implementation of the StorageEngine port.

This adapter owns one ``sqlite3`` connection to a single database file.

Durability:
    The connection runs in autocommit mode (``isolation_level=None``), so
    every statement is its own transaction: it either commits completely
    or leaves the file unchanged. ``journal_mode`` and ``synchronous``
    are applied as PRAGMAs when the connection is opened.

Thread Safety:
    The connection is opened with ``check_same_thread=False`` so that a
    handle serialized by its caller may move between threads. No locking
    is done here.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from kv_store.ports.outbound.storage_engine import Params, Row, StorageEngineError

# Journal modes that keep a rollback journal or WAL on disk, so a single
# statement is atomic across crashes. "memory" and "off" are excluded.
JOURNAL_MODES = ("delete", "truncate", "persist", "wal")
SYNCHRONOUS_MODES = ("off", "normal", "full", "extra")


class SQLiteEngine:
    """SQLite-backed implementation of the StorageEngine protocol.

    Attributes:
        path: Path to the database file.
    """

    def __init__(self, connection: sqlite3.Connection, path: Path) -> None:
        """Wrap an already opened connection. Use ``connect`` instead."""
        self._conn: sqlite3.Connection | None = connection
        self._path = path

    @classmethod
    def connect(
        cls,
        path: str | Path,
        timeout_seconds: float = 5.0,
        journal_mode: str = "delete",
        synchronous: str = "full",
    ) -> SQLiteEngine:
        """Open or create the database file at ``path``.

        SQLite defers reading the header until first use, so a probe read
        is issued here to surface unreadable or non-database files at
        open time rather than on the first operation.

        Args:
            path: Database file; missing parent directories are created.
            timeout_seconds: How long to wait on a locked file.
            journal_mode: Value for ``PRAGMA journal_mode``, one of JOURNAL_MODES.
            synchronous: Value for ``PRAGMA synchronous``, one of SYNCHRONOUS_MODES.

        Raises:
            ValueError: If journal_mode or synchronous is not a supported value.
            StorageEngineError: If the file cannot be created, opened, or
                is not a database.
        """
        journal_mode = journal_mode.lower()
        synchronous = synchronous.lower()
        if journal_mode not in JOURNAL_MODES:
            raise ValueError(
                f"journal_mode must be one of {JOURNAL_MODES}, got {journal_mode!r}"
            )
        if synchronous not in SYNCHRONOUS_MODES:
            raise ValueError(
                f"synchronous must be one of {SYNCHRONOUS_MODES}, got {synchronous!r}"
            )

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageEngineError(f"Cannot create directory for {path}: {e}") from e

        try:
            conn = sqlite3.connect(
                str(path),
                timeout=timeout_seconds,
                isolation_level=None,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise StorageEngineError(f"Cannot open database {path}: {e}") from e

        try:
            conn.execute(f"PRAGMA journal_mode={journal_mode}")
            conn.execute(f"PRAGMA synchronous={synchronous}")
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            conn.close()
            raise StorageEngineError(f"Cannot open database {path}: {e}") from e

        return cls(conn, path)

    @property
    def path(self) -> Path:
        """Return the database file path."""
        return self._path

    @property
    def closed(self) -> bool:
        """Return True once the connection has been released."""
        return self._conn is None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageEngineError(f"Connection to {self._path} is closed")
        return self._conn

    def execute(self, sql: str, params: Params = ()) -> None:
        """Run a statement that returns no rows."""
        conn = self._connection()
        try:
            conn.execute(sql, tuple(params))
        except sqlite3.Error as e:
            raise StorageEngineError(str(e)) from e

    def query_one(self, sql: str, params: Params = ()) -> Row | None:
        """Run a query and return its first row, or None."""
        conn = self._connection()
        try:
            return conn.execute(sql, tuple(params)).fetchone()
        except sqlite3.Error as e:
            raise StorageEngineError(str(e)) from e

    def query_all(self, sql: str, params: Params = ()) -> list[Row]:
        """Run a query and return every row."""
        conn = self._connection()
        try:
            return conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as e:
            raise StorageEngineError(str(e)) from e

    def close(self) -> None:
        """Close the connection. Subsequent calls are no-ops."""
        if self._conn is None:
            return

        conn, self._conn = self._conn, None
        try:
            conn.close()
        except sqlite3.Error as e:
            raise StorageEngineError(f"Failed to close {self._path}: {e}") from e

    def __enter__(self) -> SQLiteEngine:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
