"""Supabase client construction."""

from supabase import Client, create_client

from shared.config import Settings


def get_supabase(settings: Settings) -> Client:
    """Create a Supabase client for the configured project."""
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set for the supabase backend")

    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
