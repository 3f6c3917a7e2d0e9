from __future__ import annotations

import asyncio
import logging

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

logger = logging.getLogger(__name__)

_redis_client: Redis | None = None
_client_lock = asyncio.Lock()


async def get_redis(url: str) -> Redis:
    """Return the process-wide Redis client, connecting on first use.

    The connection is verified with ``PING`` before the singleton is stored so
    a misconfigured ``REDIS_URL`` fails at startup instead of on the first
    favorites write.
    """

    global _redis_client

    # Acquire the lock first to avoid two coroutines racing to connect.
    async with _client_lock:
        if _redis_client is not None:
            return _redis_client

        client = Redis.from_url(url, decode_responses=False)
        try:
            await client.ping()
        except RedisConnectionError as exc:
            logger.error("Redis connection failed for favorites storage: %s", exc)
            await client.aclose()
            raise
        _redis_client = client
        logger.info("Redis connection established successfully")
        return _redis_client


async def close_redis() -> None:
    """Close the global Redis connection gracefully."""

    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None


__all__ = ["close_redis", "get_redis"]
