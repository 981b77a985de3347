"""Redis store for the link shortener."""

import logging
from typing import Callable, List, Optional

import redis.asyncio as redis
from redis.exceptions import WatchError

from .base import KeyValueStore


# Optimistic update attempts before giving up on a hot key
MAX_UPDATE_ATTEMPTS = 50


class RedisStore(KeyValueStore):
    """Redis-backed key-value store."""

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "shortlink:",
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Prefix namespacing every key this store writes
            logger: Optional logger instance
            client: Pre-built client (skips from_url)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = client

    async def connect(self) -> None:
        """Connect to Redis."""
        if self.client is None:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        await self.client.ping()
        self.logger.info("Connected to Redis")

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise RuntimeError("RedisStore.connect() must be awaited before use")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        return await self._require_client().get(self._key(key))

    async def put(self, key: str, value: str, only_if_absent: bool = False) -> bool:
        # SET NX returns None when the key already exists
        result = await self._require_client().set(self._key(key), value, nx=only_if_absent)
        return bool(result)

    async def update(self, key: str, transform: Callable[[str], str]) -> Optional[str]:
        """Read-modify-write under WATCH; retried when another client writes first."""
        full_key = self._key(key)

        async with self._require_client().pipeline(transaction=True) as pipe:
            for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
                try:
                    await pipe.watch(full_key)
                    current = await pipe.get(full_key)
                    if current is None:
                        await pipe.reset()
                        return None

                    new_value = transform(current)
                    pipe.multi()
                    pipe.set(full_key, new_value)
                    await pipe.execute()
                    return new_value
                except WatchError:
                    self.logger.debug(f"Concurrent write to {key}, retrying update (attempt {attempt})")

        raise WatchError(f"Gave up updating {key} after {MAX_UPDATE_ATTEMPTS} attempts")

    async def keys(self) -> List[str]:
        client = self._require_client()
        prefix_len = len(self.key_prefix)
        return [k[prefix_len:] async for k in client.scan_iter(match=f"{self.key_prefix}*")]

    async def health_check(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")
