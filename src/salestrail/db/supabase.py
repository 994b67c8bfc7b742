"""Supabase client used by the key/value store backend."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the shared client, or None when the store has no credentials.

    Creating the client does not contact the server; the first table query
    is where network failures surface.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase store selected but SALESTRAIL_SUPABASE_URL or SALESTRAIL_SUPABASE_KEY is unset")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as exc:
        logger.error(f"Could not create Supabase client for {settings.supabase_url}: {exc}")
        return None
