"""Key-value record entity.

A record is one row of the ``kv`` table. Keys are unique within a store;
values are always present for a stored key (absence of a record, never a
NULL value, is how "no value" is represented).
"""

from __future__ import annotations

from typing import NamedTuple


class KeyValueRecord(NamedTuple):
    """A single stored key and its current value.

    Being a named tuple, a record compares equal to the plain
    ``(key, value)`` pair, so enumeration results can be checked against
    sets of tuples.

    Example:
        >>> record = KeyValueRecord("status", "OK")
        >>> record == ("status", "OK")
        True
        >>> record.value
        'OK'
    """

    key: str
    value: str

    @classmethod
    def from_row(cls, row: tuple) -> KeyValueRecord:
        """Build a record from an engine row of ``(key, value)``."""
        key, value = row
        return cls(key=key, value=value)
