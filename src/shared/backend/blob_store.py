"""Supabase Storage adapter for the blob store."""

import asyncio

import structlog
from supabase import Client

from shared.errors import BlobStoreError
from shared.storage.blob_store_port import BlobStorePort

logger = structlog.get_logger(__name__)


class SupabaseBlobStore(BlobStorePort):
    """Blob store backed by a Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: str) -> None:
        self._client = client
        self.bucket = bucket

    async def upload(self, path: str, data: bytes, content_type: str | None = None) -> str:
        file_options = {"content-type": content_type} if content_type else None

        def _upload():
            return self._client.storage.from_(self.bucket).upload(path, data, file_options)

        try:
            await asyncio.to_thread(_upload)
        except Exception as exc:
            logger.error("Image upload failed", bucket=self.bucket, path=path, error=str(exc))
            raise BlobStoreError(f"Upload of {path} failed", cause=exc) from exc

        return path

    async def get_public_url(self, reference: str) -> str:
        try:
            return await asyncio.to_thread(self._client.storage.from_(self.bucket).get_public_url, reference)
        except Exception as exc:
            raise BlobStoreError(f"Could not resolve a public URL for {reference}", cause=exc) from exc
