"""Domain value objects."""

from kv_store.domain.value_objects.store_state import StoreState

__all__ = ["StoreState"]
