"""Ports layer - interface definitions following Hexagonal Architecture.

- Inbound port: KeyValueStorePort, the API offered to clients
- Outbound port: StorageEngine, the durable engine the store depends on

Adapters implement these ports with concrete functionality.
"""

from kv_store.ports.inbound import (
    KeyValueStoreError,
    KeyValueStorePort,
    NotOpenError,
    ReadError,
    SchemaError,
    StorageUnavailable,
    WriteError,
)
from kv_store.ports.outbound import StorageEngine, StorageEngineError

__all__ = [
    # Inbound ports
    "KeyValueStorePort",
    "KeyValueStoreError",
    "StorageUnavailable",
    "SchemaError",
    "NotOpenError",
    "WriteError",
    "ReadError",
    # Outbound ports
    "StorageEngine",
    "StorageEngineError",
]
