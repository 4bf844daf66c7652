"""Default Redis clients for governors.

Governors constructed without an explicit client share one pooled client per
process, built lazily from ``settings.redis_url``. Building a client does not
open a connection; the first command does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import redis
import redis.asyncio as aioredis

from adaptive_polling.config import settings

if TYPE_CHECKING:
    from redis import Redis
    from redis.asyncio import Redis as AsyncRedis

# Module-level connection pools
_redis_client: Redis | None = None
_async_redis_client: AsyncRedis | None = None


def get_redis() -> Redis:
    """Get or create the blocking Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
        )
    return _redis_client


def close_redis() -> None:
    """Close the blocking client's connections."""
    global _redis_client
    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


async def get_async_redis() -> AsyncRedis:
    """Get or create the asyncio Redis client."""
    global _async_redis_client
    if _async_redis_client is None:
        _async_redis_client = aioredis.from_url(  # type: ignore[no-untyped-call]
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
        )
    return _async_redis_client


async def close_async_redis() -> None:
    """Close the asyncio client's connections."""
    global _async_redis_client
    if _async_redis_client is not None:
        await _async_redis_client.aclose()
        _async_redis_client = None
