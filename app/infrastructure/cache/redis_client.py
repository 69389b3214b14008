# app/infrastructure/cache/redis_client.py

from typing import Optional

import redis.asyncio as redis

from app.config.settings import get_settings


class RedisClient:
    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(
            url or get_settings().redis_url,
            decode_responses=True,
        )

    async def set_cache(self, key: str, value: str, ttl: int = 300):
        await self.client.set(key, value, ex=ttl)

    async def get_cache(self, key: str):
        return await self.client.get(key)

    async def delete_key(self, key: str) -> None:
        """Delete a key."""
        await self.client.delete(key)

    async def incr(self, key: str) -> int:
        """Atomically increment an integer counter; missing keys start at 0."""
        return await self.client.incr(key)
