"""Inbound ports - the API contract offered to store clients."""

from kv_store.ports.inbound.key_value import (
    KeyValueStoreError,
    KeyValueStorePort,
    NotOpenError,
    ReadError,
    SchemaError,
    StorageUnavailable,
    WriteError,
)

__all__ = [
    "KeyValueStorePort",
    "KeyValueStoreError",
    "StorageUnavailable",
    "SchemaError",
    "NotOpenError",
    "WriteError",
    "ReadError",
]
