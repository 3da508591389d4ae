"""Redis store for distributed locks.

Only used when REPLY_LOCK_BACKEND=redis, so several API processes
serialize reply appends on the same parent message.
"""

import logging

import redis.asyncio as redis
from redis.asyncio.lock import Lock

from message_api.settings import get_settings

# Key prefixes
PREFIX_LOCK = "lock:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


def lock_key(key: str) -> str:
    return f"{PREFIX_LOCK}{key}"


def get_lock(key: str, ttl: int, wait: float) -> Lock:
    """Distributed lock for `key`.

    Args:
        key: Lock key (e.g., message:<id>).
        ttl: Seconds before an abandoned lock expires.
        wait: Seconds to wait for the lock before giving up.

    Returns:
        redis-py Lock; acquire() returns False once `wait` runs out.
    """
    return _get_redis().lock(lock_key(key), timeout=ttl, blocking_timeout=wait)
