"""
Supabase client construction for the client app.

The client is created once by the caller and passed to the services that
need it; nothing here keeps a module-level instance.
"""

import logging
from typing import Optional
from supabase import acreate_client, AsyncClient

from .config import get_supabase_url, get_supabase_anon_key

logger = logging.getLogger(__name__)


async def create_supabase_client(
    url: Optional[str] = None,
    key: Optional[str] = None
) -> AsyncClient:
    """
    Create an async Supabase client.

    The async client is required for Realtime subscriptions; the data API and
    storage calls go through the same instance.

    Args:
        url: Project URL (default: SUPABASE_URL)
        key: Public anon key (default: SUPABASE_ANON_KEY)

    Returns:
        Supabase AsyncClient instance
    """
    client = await acreate_client(url or get_supabase_url(), key or get_supabase_anon_key())
    logger.info("Supabase client initialized")
    return client
