"""Key-value store - store handle and data-access layer.

This module provides the KeyValueStore class, an explicit handle that owns
one storage engine connection and exposes upsert, point lookup and full
enumeration over the ``kv`` table.

Usage:
    from kv_store import open_store

    with open_store("/path/to/data.sqlite") as store:
        store.set("temperature", "23.4")
        store.set("temperature", "24.1")
        store.get("temperature")   # "24.1"
        store.get("missing")       # None
        store.list()               # [KeyValueRecord("temperature", "24.1")]

Every operation is synchronous and auto-committed by the engine; nothing
is retried here. Engine failures are logged and re-raised as
KeyValueStoreError subclasses.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Generator

from kv_store.adapters.outbound.sqlite_engine import SQLiteEngine
from kv_store.domain.entities import KeyValueRecord
from kv_store.domain.value_objects import StoreState
from kv_store.infrastructure.config import Config, StorageConfig, get_config
from kv_store.infrastructure.logging import get_logger
from kv_store.infrastructure.metrics import MetricsRegistry, get_metrics
from kv_store.infrastructure.tracing import trace_span
from kv_store.ports.inbound.key_value import (
    NotOpenError,
    ReadError,
    SchemaError,
    StorageUnavailable,
    WriteError,
)
from kv_store.ports.outbound.storage_engine import StorageEngine, StorageEngineError

CREATE_TABLE_SQL = "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT)"
UPSERT_SQL = (
    "INSERT INTO kv (key, value) VALUES (?, ?) "
    "ON CONFLICT(key) DO UPDATE SET value=excluded.value"
)
SELECT_VALUE_SQL = "SELECT value FROM kv WHERE key = ?"
SELECT_ALL_SQL = "SELECT key, value FROM kv"
TABLE_INFO_SQL = "PRAGMA table_info(kv)"

EngineFactory = Callable[[Path, StorageConfig], StorageEngine]


def sqlite_engine_factory(path: Path, storage: StorageConfig) -> StorageEngine:
    """Open a SQLiteEngine using the storage settings."""
    return SQLiteEngine.connect(
        path,
        timeout_seconds=storage.timeout_seconds,
        journal_mode=storage.journal_mode,
        synchronous=storage.synchronous,
    )


@contextmanager
def _observed(
    metrics: MetricsRegistry,
    operation: str,
    key: str | None = None,
) -> Generator[None, None, None]:
    """Trace, time and count one store operation."""
    start = time.perf_counter()
    status = "error"
    with trace_span(f"kv_store.{operation}", {"kv.operation": operation, "kv.key": key}):
        try:
            yield
            status = "success"
        finally:
            metrics.operation_latency_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )
            metrics.operations_total.labels(operation=operation, status=status).inc()


def _require_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")


def _schema_mismatch(columns: list[tuple]) -> str | None:
    """Describe why ``PRAGMA table_info(kv)`` rows are unusable, or None.

    Rows are ``(cid, name, type, notnull, dflt_value, pk)``. The upsert
    needs ``key`` and ``value`` columns with ``key`` as the sole primary key.
    """
    names = {row[1].lower() for row in columns}
    missing = sorted({"key", "value"} - names)
    if missing:
        return f"kv table is missing column(s): {', '.join(missing)}"

    primary_key = sorted(row[1].lower() for row in columns if row[5])
    if primary_key != ["key"]:
        return f"kv primary key must be (key), found ({', '.join(primary_key)})"
    return None


class KeyValueStore:
    """Durable string-to-string store over a single ``kv`` table.

    A handle is OPEN from a successful ``open`` until ``close``; any data
    operation on a closed handle raises NotOpenError. Handles are
    independent, so a process may hold several stores at once.

    Thread Safety:
        None. Callers sharing a handle must serialize access.
    """

    def __init__(
        self,
        engine: StorageEngine,
        path: Path,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Wrap an engine whose ``kv`` table already exists. Use ``open``."""
        self._engine = engine
        self._path = path
        self._metrics = metrics or get_metrics()
        self._state = StoreState.OPEN
        self._log = get_logger("key_value_store", path=str(path))

    @classmethod
    def open(
        cls,
        path: str | Path | None = None,
        *,
        config: Config | None = None,
        engine_factory: EngineFactory | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> KeyValueStore:
        """Open or create the store at ``path`` and ensure the table exists.

        Args:
            path: Backing file. Defaults to ``config.storage.database_path``.
            config: Settings; the global configuration when omitted.
            engine_factory: Builds the engine connection (SQLite by default).
            metrics: Metrics registry; the process-wide one when omitted.

        Raises:
            StorageUnavailable: If the engine cannot open the file.
            SchemaError: If the ``kv`` table cannot be created, or exists
                without ``key`` as its primary key.
        """
        config = config or get_config()
        path = Path(path) if path is not None else config.storage.database_path
        engine_factory = engine_factory or sqlite_engine_factory
        metrics = metrics or get_metrics()
        log = get_logger("key_value_store", path=str(path))

        with _observed(metrics, "open"):
            try:
                engine = engine_factory(path, config.storage)
            except StorageEngineError as e:
                log.error("store_open_failed", operation="open", error=str(e))
                raise StorageUnavailable(
                    f"Cannot open store at {path}: {e}", operation="open", path=path
                ) from e

            cause: StorageEngineError | None = None
            try:
                engine.execute(CREATE_TABLE_SQL)
                problem = _schema_mismatch(engine.query_all(TABLE_INFO_SQL))
            except StorageEngineError as e:
                problem, cause = str(e), e

            if problem is not None:
                log.error("schema_init_failed", operation="open", error=problem)
                try:
                    engine.close()
                except StorageEngineError:
                    log.warning("engine_close_failed", operation="open", exc_info=True)
                raise SchemaError(
                    f"Cannot use kv table in {path}: {problem}", operation="open", path=path
                ) from cause

        store = cls(engine, path, metrics)
        metrics.open_stores.inc()
        log.info("store_opened")
        return store

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    @property
    def state(self) -> StoreState:
        """Return the handle's lifecycle state."""
        return self._state

    @property
    def is_open(self) -> bool:
        """Return True while the handle holds a connection."""
        return self._state.is_open

    def _ensure_open(self, operation: str, key: str | None = None) -> None:
        if not self._state.is_open:
            self._log.error("store_not_open", operation=operation, key=key)
            raise NotOpenError(
                f"Cannot {operation}: store at {self._path} is closed",
                operation=operation,
                key=key,
                path=self._path,
            )

    def set(self, key: str, value: str) -> None:
        """Insert ``key`` or replace its value.

        Raises:
            TypeError: If key or value is not a str.
            NotOpenError: If the handle is closed.
            WriteError: If the engine fails the upsert.
        """
        _require_str("key", key)
        _require_str("value", value)

        with _observed(self._metrics, "set", key):
            self._ensure_open("set", key)
            try:
                self._engine.execute(UPSERT_SQL, (key, value))
            except StorageEngineError as e:
                self._log.error("write_failed", operation="set", key=key, error=str(e))
                raise WriteError(
                    f"Failed to set {key!r}: {e}", operation="set", key=key, path=self._path
                ) from e

        self._log.debug("key_set", key=key)

    def get(self, key: str) -> str | None:
        """Return the value stored for ``key``, or None if there is none.

        Raises:
            TypeError: If key is not a str.
            NotOpenError: If the handle is closed.
            ReadError: If the engine fails the lookup.
        """
        _require_str("key", key)

        with _observed(self._metrics, "get", key):
            self._ensure_open("get", key)
            try:
                row = self._engine.query_one(SELECT_VALUE_SQL, (key,))
            except StorageEngineError as e:
                self._log.error("read_failed", operation="get", key=key, error=str(e))
                raise ReadError(
                    f"Failed to get {key!r}: {e}", operation="get", key=key, path=self._path
                ) from e

        if row is None:
            self._metrics.get_misses_total.inc()
            self._log.debug("key_missing", key=key)
            return None
        return row[0]

    def list(self) -> list[KeyValueRecord]:
        """Return every stored record in unspecified order.

        Each call scans the table afresh. The scan is materialized before
        returning, so a failure yields ReadError and no partial result.

        Raises:
            NotOpenError: If the handle is closed.
            ReadError: If the engine fails during the scan.
        """
        with _observed(self._metrics, "list"):
            self._ensure_open("list")
            try:
                rows = self._engine.query_all(SELECT_ALL_SQL)
            except StorageEngineError as e:
                self._log.error("read_failed", operation="list", error=str(e))
                raise ReadError(
                    f"Failed to list records: {e}", operation="list", path=self._path
                ) from e

        return [KeyValueRecord.from_row(row) for row in rows]

    def close(self) -> None:
        """Release the connection.

        Calling close on a closed handle does nothing. A failure to release
        the connection is logged and not raised; the handle is closed
        either way.
        """
        if not self._state.is_open:
            return

        self._state = StoreState.CLOSED
        self._metrics.open_stores.dec()
        try:
            self._engine.close()
        except StorageEngineError:
            self._log.warning("engine_close_failed", operation="close", exc_info=True)
            return

        self._log.info("store_closed")

    def __enter__(self) -> KeyValueStore:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return f"KeyValueStore(path={str(self._path)!r}, state={self._state.value})"


def open_store(
    path: str | Path | None = None,
    *,
    config: Config | None = None,
    engine_factory: EngineFactory | None = None,
    metrics: MetricsRegistry | None = None,
) -> KeyValueStore:
    """Open a store handle. See ``KeyValueStore.open``."""
    return KeyValueStore.open(
        path, config=config, engine_factory=engine_factory, metrics=metrics
    )
