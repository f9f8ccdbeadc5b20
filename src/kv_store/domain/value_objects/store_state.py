"""Lifecycle state of a store handle."""

from __future__ import annotations

from enum import Enum


class StoreState(Enum):
    """Store handle states.

    OPEN: Connection held, table verified; all operations allowed
    CLOSED: Connection released; every operation raises NotOpenError
    """

    OPEN = "open"
    CLOSED = "closed"

    @property
    def is_open(self) -> bool:
        return self is StoreState.OPEN
