# app/core/supabase_client.py
from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings

settings = get_settings()


@lru_cache
def supabase_admin() -> Client:
    """
    Service-role client, built once per process.

    Only the backend holds SUPABASE_SERVICE_ROLE_KEY; it bypasses RLS on
    the storage bucket used for service cover images.
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is required for storage access")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


def storage_bucket():
    """Handle on the configured Storage bucket (STORAGE_BUCKET)."""
    return supabase_admin().storage.from_(settings.STORAGE_BUCKET)
