"""Supabase table adapter for the durable object store.

The supabase client is synchronous; every call runs in a worker thread so the
event loop keeps serving other requests while the network round trip is in
flight.
"""

import asyncio

import structlog
from supabase import Client

from shared.errors import ObjectStoreError
from shared.storage.object_store_port import ObjectStorePort, OrderSpec

logger = structlog.get_logger(__name__)


class SupabaseObjectStore(ObjectStorePort):
    """Object store backed by Supabase (PostgREST) tables, one per collection."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def list_all(self, collection: str, order_by: OrderSpec | None = None) -> list[dict]:
        def _select():
            query = self._client.table(collection).select("*")
            if order_by is not None:
                query = query.order(order_by.field, desc=order_by.descending)
            return query.execute().data

        try:
            rows = await asyncio.to_thread(_select)
        except Exception as exc:
            logger.error("Listing records failed", collection=collection, error=str(exc))
            raise ObjectStoreError(f"Listing {collection} failed", cause=exc) from exc

        return [{**row, "id": str(row["id"])} for row in rows or []]

    async def insert(self, collection: str, record: dict) -> str:
        def _insert():
            return self._client.table(collection).insert(record).execute().data

        try:
            rows = await asyncio.to_thread(_insert)
        except Exception as exc:
            logger.error("Inserting record failed", collection=collection, error=str(exc))
            raise ObjectStoreError(f"Inserting into {collection} failed", cause=exc) from exc

        if not rows:
            raise ObjectStoreError(f"Insert into {collection} returned no record")
        return str(rows[0]["id"])

    async def update(self, collection: str, record_id: str, changes: dict) -> None:
        def _update():
            return self._client.table(collection).update(changes).eq("id", record_id).execute().data

        try:
            rows = await asyncio.to_thread(_update)
        except Exception as exc:
            logger.error("Updating record failed", collection=collection, record_id=record_id, error=str(exc))
            raise ObjectStoreError(f"Updating {collection}/{record_id} failed", cause=exc) from exc

        if not rows:
            raise ObjectStoreError(f"No record {record_id} in {collection}")
