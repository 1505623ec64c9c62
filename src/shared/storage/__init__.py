"""Storage collaborators: durable records, blobs and the local key-value store."""

from shared.storage.blob_store_port import BlobStorePort
from shared.storage.fake_blob_store import InMemoryBlobStore
from shared.storage.fake_object_store import InMemoryObjectStore
from shared.storage.local_store import FileKeyValueStore, InMemoryKeyValueStore
from shared.storage.local_store_port import KeyValueStorePort
from shared.storage.object_store_port import ObjectStorePort, OrderSpec

__all__ = [
    "BlobStorePort",
    "FileKeyValueStore",
    "InMemoryBlobStore",
    "InMemoryKeyValueStore",
    "InMemoryObjectStore",
    "KeyValueStorePort",
    "ObjectStorePort",
    "OrderSpec",
]
