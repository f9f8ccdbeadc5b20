"""Outbound adapters - implementations of outbound ports."""

from kv_store.adapters.outbound.sqlite_engine import SQLiteEngine

__all__ = ["SQLiteEngine"]
