"""Domain entities."""

from kv_store.domain.entities.record import KeyValueRecord

__all__ = ["KeyValueRecord"]
