"""Tests for the in-memory object store adapter."""

import asyncio

import pytest
from shared.errors import ObjectStoreError
from shared.storage import InMemoryObjectStore, OrderSpec


@pytest.fixture
def store():
    return InMemoryObjectStore()


class TestInsertAndList:
    def test_insert_returns_generated_id(self, store):
        record_id = asyncio.run(store.insert("orders", {"total": 10.0}))

        assert record_id
        assert store.get("orders", record_id) == {"id": record_id, "total": 10.0}

    def test_ids_are_unique(self, store):
        first = asyncio.run(store.insert("orders", {"total": 1.0}))
        second = asyncio.run(store.insert("orders", {"total": 1.0}))
        assert first != second

    def test_list_all_of_unknown_collection_is_empty(self, store):
        assert asyncio.run(store.list_all("products")) == []

    def test_list_all_sorts_descending(self, store):
        store.seed(
            "products",
            [
                {"id": "old", "created_at": "2024-01-01T00:00:00+00:00"},
                {"id": "new", "created_at": "2024-03-01T00:00:00+00:00"},
                {"id": "mid", "created_at": "2024-02-01T00:00:00+00:00"},
            ],
        )

        records = asyncio.run(store.list_all("products", order_by=OrderSpec("created_at")))

        assert [r["id"] for r in records] == ["new", "mid", "old"]

    def test_list_all_puts_records_without_the_sort_field_last(self, store):
        store.seed("products", [{"id": "undated"}, {"id": "dated", "created_at": "2024-01-01"}])

        records = asyncio.run(store.list_all("products", order_by=OrderSpec("created_at")))

        assert [r["id"] for r in records] == ["dated", "undated"]

    def test_returned_records_are_copies(self, store):
        store.seed("orders", [{"id": "o-1", "items": [{"name": "TV"}]}])

        records = asyncio.run(store.list_all("orders"))
        records[0]["items"].append({"name": "Remote"})

        assert store.get("orders", "o-1")["items"] == [{"name": "TV"}]


class TestUpdate:
    def test_update_merges_changes(self, store):
        (order_id,) = store.seed("orders", [{"total": 5.0, "shipped": False}])

        asyncio.run(store.update("orders", order_id, {"shipped": True}))

        assert store.get("orders", order_id) == {"id": order_id, "total": 5.0, "shipped": True}

    def test_update_of_missing_record_fails(self, store):
        with pytest.raises(ObjectStoreError):
            asyncio.run(store.update("orders", "missing", {"shipped": True}))


class TestFailureSimulation:
    def test_configured_failure_raises_on_every_call(self, store):
        store.configure(should_succeed=False, failure_reason="offline")

        with pytest.raises(ObjectStoreError, match="offline"):
            asyncio.run(store.list_all("products"))
        with pytest.raises(ObjectStoreError):
            asyncio.run(store.insert("products", {}))

    def test_calls_are_recorded(self, store):
        asyncio.run(store.list_all("products"))
        asyncio.run(store.insert("orders", {}))

        assert store.calls == [
            {"method": "list_all", "collection": "products"},
            {"method": "insert", "collection": "orders"},
        ]

    def test_reset_restores_defaults(self, store):
        store.configure(should_succeed=False)
        store.seed("orders", [{"total": 1.0}])

        store.reset()

        assert store.should_succeed is True
        assert store.collections == {}
        assert store.calls == []
