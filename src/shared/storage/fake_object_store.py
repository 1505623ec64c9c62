"""In-memory object store: keeps records in dicts for development and tests."""

import copy
from uuid import uuid4

from shared.errors import ObjectStoreError
from shared.storage.object_store_port import ObjectStorePort, OrderSpec


class InMemoryObjectStore(ObjectStorePort):
    """Object store adapter that holds collections in memory.

    Can be configured to fail, which simulates an unreachable backend.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict]] = {}
        self.calls: list[dict] = []
        self.should_succeed: bool = True
        self.failure_reason: str = "Object store unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Object store unavailable") -> None:
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def seed(self, collection: str, records: list[dict]) -> list[str]:
        """Load records directly, bypassing failure simulation. Returns their ids."""
        ids = []
        for record in records:
            record = copy.deepcopy(record)
            record_id = str(record.pop("id", None) or uuid4().hex[:20])
            self.collections.setdefault(collection, {})[record_id] = record
            ids.append(record_id)
        return ids

    def get(self, collection: str, record_id: str) -> dict | None:
        record = self.collections.get(collection, {}).get(record_id)
        if record is None:
            return None
        return {"id": record_id, **copy.deepcopy(record)}

    def _check(self, method: str, collection: str) -> None:
        self.calls.append({"method": method, "collection": collection})
        if not self.should_succeed:
            raise ObjectStoreError(f"{method} on {collection} failed: {self.failure_reason}")

    async def list_all(self, collection: str, order_by: OrderSpec | None = None) -> list[dict]:
        self._check("list_all", collection)
        records = [
            {"id": record_id, **copy.deepcopy(record)}
            for record_id, record in self.collections.get(collection, {}).items()
        ]
        if order_by is not None:
            present = [r for r in records if r.get(order_by.field) is not None]
            missing = [r for r in records if r.get(order_by.field) is None]
            present.sort(key=lambda r: r[order_by.field], reverse=order_by.descending)
            records = present + missing
        return records

    async def insert(self, collection: str, record: dict) -> str:
        self._check("insert", collection)
        record_id = uuid4().hex[:20]
        self.collections.setdefault(collection, {})[record_id] = copy.deepcopy(record)
        return record_id

    async def update(self, collection: str, record_id: str, changes: dict) -> None:
        self._check("update", collection)
        records = self.collections.get(collection, {})
        if record_id not in records:
            raise ObjectStoreError(f"No record {record_id} in {collection}")
        records[record_id].update(copy.deepcopy(changes))

    def reset(self) -> None:
        """Drop all collections and restore default behavior."""
        self.collections.clear()
        self.calls.clear()
        self.should_succeed = True
        self.failure_reason = "Object store unavailable"
