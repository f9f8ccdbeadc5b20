"""Application layer - the store handle and its data operations."""

from kv_store.application.key_value_store import KeyValueStore, open_store

__all__ = ["KeyValueStore", "open_store"]
