"""Blob store port: abstract interface for uploaded files."""

from abc import ABC, abstractmethod


class BlobStorePort(ABC):
    """Abstract interface for file storage.

    Only used when a seller submits a new product image.
    """

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str | None = None) -> str:
        """Store bytes at `path` and return a reference to them."""
        ...

    @abstractmethod
    async def get_public_url(self, reference: str) -> str:
        """Return a URL from which the stored file can be fetched."""
        ...
