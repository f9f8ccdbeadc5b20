"""Outbound ports - interfaces for external dependencies.

The store depends on exactly one external system: the durable storage
engine that owns the backing file.
"""

from kv_store.ports.outbound.storage_engine import StorageEngine, StorageEngineError

__all__ = [
    "StorageEngine",
    "StorageEngineError",
]
