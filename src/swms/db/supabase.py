"""Supabase client for the Python backend."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings
from ..errors import StorageUnavailableError

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None


def require_client() -> Client:
    """Return the Supabase client or raise when the database is not configured."""
    client = get_supabase_client()
    if client is None:
        raise StorageUnavailableError(
            "Database not configured. Set SWMS_SUPABASE_URL and SWMS_SUPABASE_KEY environment variables."
        )
    return client
