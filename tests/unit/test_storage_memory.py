"""
Unit tests for array storage.
"""

from neo_persistent_config.entities.protocols import StorageContract
from neo_persistent_config.storage.memory import ArrayStorage


class TestArrayStorage:
    """Test the in-memory storage contract implementation."""

    def test_implements_contract(self):
        assert isinstance(ArrayStorage(), StorageContract)

    def test_save_merges(self):
        """Test saves add and update keys without dropping others."""
        storage = ArrayStorage({"a": "1"})

        assert storage.save({"b": "2"})
        storage.save({"a": "3"})

        assert storage.get() == {"a": "3", "b": "2"}

    def test_get_returns_copy(self):
        storage = ArrayStorage({"a": "1"})

        storage.get()["a"] = "changed"

        assert storage.get() == {"a": "1"}

    def test_clear(self):
        storage = ArrayStorage({"a": "1", "b": "2"})

        storage.clear()

        assert storage.get() == {}

    def test_clear_value(self):
        storage = ArrayStorage({"a": "1", "b": "2"})

        storage.clear_value("a")
        storage.clear_value("missing")

        assert storage.get() == {"b": "2"}
