"""Durable object store port: abstract interface for record collections.

Adapters persist plain dict records grouped in named collections and assign
record identities on insert. Any failure is reported as ObjectStoreError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OrderSpec:
    """Sort order for listing a collection."""

    field: str
    descending: bool = True


class ObjectStorePort(ABC):
    """Abstract interface for durable record storage."""

    @abstractmethod
    async def list_all(self, collection: str, order_by: OrderSpec | None = None) -> list[dict]:
        """Return every record of a collection, each carrying its `id`."""
        ...

    @abstractmethod
    async def insert(self, collection: str, record: dict) -> str:
        """Store a new record and return its generated id."""
        ...

    @abstractmethod
    async def update(self, collection: str, record_id: str, changes: dict) -> None:
        """Apply a partial update to an existing record."""
        ...
