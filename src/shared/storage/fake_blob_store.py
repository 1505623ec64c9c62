"""In-memory blob store: records uploads for tests."""

from shared.errors import BlobStoreError
from shared.storage.blob_store_port import BlobStorePort


class InMemoryBlobStore(BlobStorePort):
    """Blob store adapter that keeps uploaded bytes in memory."""

    def __init__(self, base_url: str = "https://storage.local/product-images") -> None:
        self.base_url = base_url.rstrip("/")
        self.blobs: dict[str, dict] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Upload failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Upload failed") -> None:
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def upload(self, path: str, data: bytes, content_type: str | None = None) -> str:
        if not self.should_succeed:
            raise BlobStoreError(f"Upload of {path} failed: {self.failure_reason}")
        self.blobs[path] = {"data": bytes(data), "content_type": content_type}
        return path

    async def get_public_url(self, reference: str) -> str:
        if reference not in self.blobs:
            raise BlobStoreError(f"Unknown blob reference: {reference}")
        return f"{self.base_url}/{reference}"

    def reset(self) -> None:
        """Clear uploads (useful between tests)."""
        self.blobs.clear()
        self.should_succeed = True
        self.failure_reason = "Upload failed"
