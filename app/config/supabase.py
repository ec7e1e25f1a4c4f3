"""Supabase connection and client management."""

import asyncio
from typing import Optional

from supabase import AsyncClient, StorageException, SupabaseException, acreate_client

from app.settings import settings
from app.utils.logging_config import logger

_supabase_admin_client: Optional[AsyncClient] = None
_supabase_admin_lock = asyncio.Lock()


async def supabase_admin() -> AsyncClient:
    """Shared service-role client for the API process."""
    global _supabase_admin_client
    async with _supabase_admin_lock:
        if _supabase_admin_client is None:
            _supabase_admin_client = await acreate_client(
                settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY
            )
    return _supabase_admin_client


async def new_supabase_admin() -> AsyncClient:
    """
    Builds a fresh async service-role client.

    Celery tasks run each job under its own event loop, so they cannot share
    the API's cached client.
    """
    try:
        return await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    except SupabaseException as e:
        logger.error(f"Supabase client creation error: {e}")
        raise


async def check_supabase_connection() -> None:
    """
    Checks that the recordings bucket is reachable.
    Raises an exception if the connection fails.
    """
    try:
        supabase_client = await supabase_admin()
        await supabase_client.storage.get_bucket(settings.RECORDINGS_BUCKET)
        logger.info("Supabase connection successful")
    except StorageException as e:
        logger.error(f"Supabase connection error: {e}")
        raise
