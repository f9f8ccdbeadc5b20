"""Key-value store port and its error taxonomy.

This inbound port is the contract clients program against: a handle that
is either open or closed, and three data operations (upsert, point lookup,
full enumeration) over a single ``kv`` table.

Every failure reported by the storage engine surfaces as one of the
``KeyValueStoreError`` subclasses below, carrying the operation name and,
where applicable, the key. A missing key is not a failure: ``get`` returns
``None``.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, runtime_checkable

from kv_store.domain.entities import KeyValueRecord


@runtime_checkable
class KeyValueStorePort(Protocol):
    """Protocol for a durable string-to-string store.

    Thread Safety:
        None. Callers sharing a handle across threads must serialize
        access themselves.
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Return the backing file path."""
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Return True while the handle holds a connection."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Insert ``key`` or replace its value (last write wins).

        The write is atomic: on failure the previous value is retained.

        Raises:
            NotOpenError: If the handle is closed.
            WriteError: If the engine rejects or fails the write.
        """
        ...

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the current value for ``key``, or None if absent.

        Raises:
            NotOpenError: If the handle is closed.
            ReadError: If the engine fails the lookup.
        """
        ...

    @abstractmethod
    def list(self) -> list[KeyValueRecord]:
        """Return every stored record, in no particular order.

        Each call re-reads the table. The result is complete or the call
        raises; partial scans are never returned.

        Raises:
            NotOpenError: If the handle is closed.
            ReadError: If the engine fails during the scan.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        ...


class KeyValueStoreError(Exception):
    """Base class for store failures.

    Attributes:
        operation: The store operation that failed (open, set, get, list).
        key: The key involved, when the operation takes one.
        path: The backing file, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        key: str | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.key = key
        self.path = path


class StorageUnavailable(KeyValueStoreError):
    """Raised when the backing file cannot be opened or created."""

    pass


class SchemaError(KeyValueStoreError):
    """Raised when the ``kv`` table cannot be created or verified."""

    pass


class NotOpenError(KeyValueStoreError):
    """Raised when an operation is attempted on a closed handle."""

    pass


class WriteError(KeyValueStoreError):
    """Raised when an upsert fails to prepare or execute."""

    pass


class ReadError(KeyValueStoreError):
    """Raised when a lookup or scan fails."""

    pass
