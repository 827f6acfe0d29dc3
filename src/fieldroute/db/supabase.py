"""Supabase client used by the settings store."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Cached Supabase client, or None when credentials are missing or invalid.

    Creating the client does not contact the server; queries can still fail
    with network errors and callers handle that themselves.
    """
    if not supabase_configured():
        logging.info("Supabase credentials not configured; settings profiles use built-in defaults")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None
