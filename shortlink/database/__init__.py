"""Storage layer for the link shortener."""

from .base import KeyValueStore
from .memory import MemoryStore
from .redis_store import RedisStore
from .models import ShortLink

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "ShortLink", "create_store"]


def create_store(backend: str, redis_url=None, logger=None) -> KeyValueStore:
    """Build the store named by configuration.

    Args:
        backend: 'memory' or 'redis'
        redis_url: Redis connection URL (required for 'redis')
        logger: Optional logger instance

    Returns:
        Store instance (not yet connected)
    """
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        if not redis_url:
            raise ValueError("REDIS_URL is required when STORE_BACKEND=redis")
        return RedisStore(redis_url=redis_url, logger=logger)
    raise ValueError(f"Unknown store backend: {backend}")
