"""Unit tests for KeyValueRecord and StoreState."""

from __future__ import annotations

import pytest

from kv_store.domain.entities import KeyValueRecord
from kv_store.domain.value_objects import StoreState


@pytest.mark.unit
class TestKeyValueRecord:
    """Tests for KeyValueRecord."""

    def test_fields(self) -> None:
        record = KeyValueRecord("status", "OK")
        assert record.key == "status"
        assert record.value == "OK"

    def test_equals_plain_tuple(self) -> None:
        """Records compare and hash like (key, value) tuples."""
        records = {KeyValueRecord("a", "1"), KeyValueRecord("b", "2")}
        assert records == {("a", "1"), ("b", "2")}

    def test_from_row(self) -> None:
        assert KeyValueRecord.from_row(("temperature", "24.1")) == KeyValueRecord(
            "temperature", "24.1"
        )

    def test_from_row_wrong_arity(self) -> None:
        with pytest.raises(ValueError):
            KeyValueRecord.from_row(("only-key",))

    def test_immutable(self) -> None:
        record = KeyValueRecord("k", "v")
        with pytest.raises(AttributeError):
            record.value = "other"  # type: ignore[misc]


@pytest.mark.unit
class TestStoreState:
    def test_is_open(self) -> None:
        assert StoreState.OPEN.is_open
        assert not StoreState.CLOSED.is_open
