"""Managed backend (Supabase) adapters for the database and file storage."""

from shared.backend.blob_store import SupabaseBlobStore
from shared.backend.client import get_supabase
from shared.backend.object_store import SupabaseObjectStore

__all__ = ["SupabaseBlobStore", "SupabaseObjectStore", "get_supabase"]
