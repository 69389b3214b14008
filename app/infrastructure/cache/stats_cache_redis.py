"""Redis-backed cache for audit statistics. Implements StatsCache protocol."""

import json
from typing import Optional

from app.application.audit_stats import AuditStats
from app.infrastructure.cache.redis_client import RedisClient

STATS_CACHE_KEY = "audit:stats"
STATS_GENERATION_KEY = "audit:stats:generation"
DEFAULT_STATS_TTL = 30  # seconds


class RedisStatsCache:
    """Caches the last computed AuditStats under a single key with a short TTL."""

    def __init__(self, redis_client: RedisClient, ttl: int = DEFAULT_STATS_TTL) -> None:
        self._redis = redis_client
        self._ttl = ttl

    async def generation(self) -> int:
        raw = await self._redis.get_cache(STATS_GENERATION_KEY)
        return int(raw) if raw else 0

    async def get(self) -> Optional[AuditStats]:
        raw = await self._redis.get_cache(STATS_CACHE_KEY)
        if not raw:
            return None
        payload = json.loads(raw)
        # Snapshot computed before the latest invalidation
        if payload.get("generation") != await self.generation():
            return None
        return AuditStats.from_dict(payload["stats"])

    async def set(self, stats: AuditStats, generation: int) -> None:
        payload = {"generation": generation, "stats": stats.to_dict()}
        await self._redis.set_cache(STATS_CACHE_KEY, json.dumps(payload), ttl=self._ttl)

    async def invalidate(self) -> None:
        await self._redis.incr(STATS_GENERATION_KEY)
        await self._redis.delete_key(STATS_CACHE_KEY)
