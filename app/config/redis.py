"""Redis connectivity for the Celery broker."""

import redis.asyncio as redis

from app.settings import settings
from app.utils.logging_config import logger


async def check_redis_connection():
    """
    Pings the broker Celery publishes retry jobs to.
    Raises an exception if the connection fails.
    """
    try:
        async with redis.from_url(
            str(settings.REDIS_URL), encoding="utf-8", decode_responses=True
        ) as redis_client:
            if not await redis_client.ping():
                raise ConnectionError(
                    "Redis connection failed: PING command returned False"
                )
            logger.info("Redis broker connection successful")
    except Exception as e:
        logger.error(f"Redis connection error: {e}")
        raise
