"""Tests for the key-value store adapters."""

import pytest
from shared.storage import FileKeyValueStore, InMemoryKeyValueStore


class TestInMemoryKeyValueStore:
    def test_get_missing_key(self):
        assert InMemoryKeyValueStore().get("cart") is None

    def test_set_get_remove(self):
        store = InMemoryKeyValueStore()
        store.set("cart", "[]")
        assert store.get("cart") == "[]"

        store.remove("cart")
        assert store.get("cart") is None

    def test_remove_missing_key_is_a_no_op(self):
        InMemoryKeyValueStore().remove("cart")

    def test_initial_values(self):
        assert InMemoryKeyValueStore({"cart": "[1]"}).get("cart") == "[1]"


class TestFileKeyValueStore:
    def test_values_survive_a_new_instance(self, tmp_path):
        FileKeyValueStore(tmp_path).set("cart", '[{"id": "p-1"}]')

        assert FileKeyValueStore(tmp_path).get("cart") == '[{"id": "p-1"}]'
        assert (tmp_path / "cart.json").exists()

    def test_creates_missing_directory(self, tmp_path):
        directory = tmp_path / "nested" / "store"
        FileKeyValueStore(directory).set("cart", "[]")
        assert (directory / "cart.json").read_text() == "[]"

    def test_overwrite_leaves_no_temporary_files(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("cart", "first")
        store.set("cart", "second")

        assert store.get("cart") == "second"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["cart.json"]

    def test_remove(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("cart", "[]")
        store.remove("cart")
        store.remove("cart")

        assert store.get("cart") is None

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            FileKeyValueStore(tmp_path).set(key, "x")
