"""
Redis Cache Client.

Single shared redis.asyncio client built from the redis descriptor in
database.yaml. Login sessions and repeat-submit markers live here.
"""

import redis.asyncio as redis

from admin_shell.core.config import get_redis_url
from admin_shell.core.logging import get_logger

logger = get_logger(__name__)

_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Get the Redis client, creating it on first use."""
    global _client
    if _client is None:
        _client = redis.from_url(get_redis_url(), decode_responses=True)
        logger.debug("Redis client created")
    return _client


def set_redis(client: redis.Redis | None) -> None:
    """Replace the shared client (tests install a mock)."""
    global _client
    _client = client


async def close_redis() -> None:
    """Close the shared client at shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        logger.debug("Redis client closed")
    _client = None
