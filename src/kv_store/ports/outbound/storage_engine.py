"""Storage Engine port for durable table storage.

This outbound port is the only view the store has of the engine that owns
the persisted bytes. The engine is expected to:
- Run each statement as its own atomic, durable transaction
- Bind parameters rather than interpolate them into SQL
- Report every failure as StorageEngineError

The file format and page layout belong to the engine and are not part of
this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence, runtime_checkable

Params = Sequence[Any]
Row = tuple[Any, ...]


@runtime_checkable
class StorageEngine(Protocol):
    """Protocol for a single connection to a transactional file store.

    Thread Safety:
        Single caller assumed. The store never issues concurrent
        statements on one connection.
    """

    @abstractmethod
    def execute(self, sql: str, params: Params = ()) -> None:
        """Run a statement that returns no rows and commit it.

        Raises:
            StorageEngineError: If preparation or execution fails.
        """
        ...

    @abstractmethod
    def query_one(self, sql: str, params: Params = ()) -> Row | None:
        """Run a query and return its first row, or None when empty.

        Raises:
            StorageEngineError: If preparation or stepping fails.
        """
        ...

    @abstractmethod
    def query_all(self, sql: str, params: Params = ()) -> list[Row]:
        """Run a query and return all rows.

        Rows are fully read before returning; a failure mid-scan raises
        instead of yielding a truncated list.

        Raises:
            StorageEngineError: If preparation or stepping fails.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection.

        Raises:
            StorageEngineError: If the engine fails to release it.
        """
        ...


class StorageEngineError(Exception):
    """Raised when the storage engine reports a failure."""

    pass
