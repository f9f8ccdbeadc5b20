"""
KV Store - Minimal Persistent Key-Value Store

Durable string-to-string storage over a single SQLite table, with upsert,
point lookup and full enumeration.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from kv_store.application import KeyValueStore, open_store
from kv_store.domain.entities import KeyValueRecord
from kv_store.ports.inbound import (
    KeyValueStoreError,
    NotOpenError,
    ReadError,
    SchemaError,
    StorageUnavailable,
    WriteError,
)

__all__ = [
    "KeyValueStore",
    "open_store",
    "KeyValueRecord",
    "KeyValueStoreError",
    "StorageUnavailable",
    "SchemaError",
    "NotOpenError",
    "WriteError",
    "ReadError",
]
