"""Audit query engine: filtered, paginated listing and aggregate statistics over the audit log."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from app.application.audit_stats import ActionStat, AuditStats, StatsCache, UserStat
from app.application.audit_store import ActorDirectory, AuditCriteria, AuditStore
from app.application.exceptions import AuditQueryError
from app.core.clock import ensure_aware, start_of_day, utc_now
from app.domain.models.audit_event import ActorSummary, AuditEvent, AuditEventType

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
TOP_ACTORS = 10


@dataclass(frozen=True)
class AuditQuery:
    """Filters for listing audit events. Unset (or blank) filters impose no constraint."""

    actor_id: Optional[str] = None
    actor_name: Optional[str] = None
    event_type: Optional[AuditEventType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    page: int = 1
    limit: Optional[int] = None


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    pages: int


@dataclass(frozen=True)
class AuditLogItem:
    """An event plus the actor's live identity, if the actor still exists."""

    event: AuditEvent
    actor: Optional[ActorSummary] = None


@dataclass(frozen=True)
class AuditPage:
    data: List[AuditLogItem]
    pagination: Pagination


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class AuditQueryEngine:
    """
    Read-only access to the audit log. Store failures surface as AuditQueryError;
    enrichment and cache failures are logged and degrade gracefully.

    Pagination policy: out-of-range page/limit values are clamped, never rejected.
    page < 1 becomes 1, limit < 1 becomes 1, limit above max_limit becomes max_limit.

    timezone=None means the system local zone, applied with the DST offset of each
    value's own date.
    """

    def __init__(
        self,
        store: AuditStore,
        logger: logging.Logger,
        *,
        directory: Optional[ActorDirectory] = None,
        stats_cache: Optional[StatsCache] = None,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
        timezone: Optional[tzinfo] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._logger = logger
        self._directory = directory
        self._stats_cache = stats_cache
        self._max_limit = max_limit
        self._default_limit = min(default_limit, max_limit)
        self._tz = timezone
        self._clock = clock

    def _clamp(self, page: int, limit: Optional[int]) -> tuple[int, int]:
        page = max(1, page)
        if limit is None:
            limit = self._default_limit
        limit = min(max(1, limit), self._max_limit)
        return page, limit

    def _criteria(self, query: AuditQuery) -> AuditCriteria:
        start = ensure_aware(query.start_date, self._tz) if query.start_date else None
        end = ensure_aware(query.end_date, self._tz) if query.end_date else None
        return AuditCriteria(
            actor_id=_blank_to_none(query.actor_id),
            actor_name_contains=_blank_to_none(query.actor_name),
            event_type=query.event_type,
            created_from=start,
            created_to=end,
        )

    async def query(self, query: AuditQuery) -> AuditPage:
        """List matching events, newest first, one page at a time, with the unpaged total."""
        page, limit = self._clamp(query.page, query.limit)
        criteria = self._criteria(query)
        skip = (page - 1) * limit

        try:
            events = await self._store.find(criteria, offset=skip, limit=limit)
            total = await self._store.count(criteria)
        except Exception as e:
            self._logger.error("audit_query_failed", extra={"error": repr(e)})
            raise AuditQueryError("Failed to fetch audit logs") from e

        items = await self._enrich(events)
        return AuditPage(
            data=items,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )

    async def _enrich(self, events: List[AuditEvent]) -> List[AuditLogItem]:
        actor_ids = {e.actor_id for e in events if e.actor_id}
        actors = {}
        if self._directory is not None and actor_ids:
            try:
                actors = await self._directory.lookup(actor_ids)
            except Exception as e:
                self._logger.warning(
                    "audit_actor_lookup_failed",
                    extra={"error": repr(e)},
                )
        return [
            AuditLogItem(event=e, actor=actors.get(e.actor_id) if e.actor_id else None)
            for e in events
        ]

    async def stats(self) -> AuditStats:
        """Totals, today's count, top actors and per-type counts. Does not modify the store."""
        generation = await self._cache_generation()
        if generation is not None:
            cached = await self._cached_stats()
            if cached is not None:
                return cached

        midnight = start_of_day(self._clock(), self._tz)
        try:
            total_logs = await self._store.count(AuditCriteria())
            today_logs = await self._store.count(AuditCriteria(created_from=midnight))
            by_actor = await self._store.count_by_actor_name(limit=TOP_ACTORS)
            by_type = await self._store.count_by_type()
        except Exception as e:
            self._logger.error("audit_stats_failed", extra={"error": repr(e)})
            raise AuditQueryError("Failed to fetch audit statistics") from e

        stats = AuditStats(
            total_logs=total_logs,
            today_logs=today_logs,
            user_stats=[UserStat(actor_name=name, count=count) for name, count in by_actor],
            action_stats=[ActionStat(event_type=t, count=count) for t, count in by_type],
        )
        if generation is not None:
            await self._store_stats(stats, generation)
        return stats

    async def _cache_generation(self) -> Optional[int]:
        """Cache generation before computing; None skips the cache entirely."""
        if self._stats_cache is None:
            return None
        try:
            return await self._stats_cache.generation()
        except Exception as e:
            self._logger.warning("audit_stats_cache_unavailable", extra={"error": repr(e)})
            return None

    async def _cached_stats(self) -> Optional[AuditStats]:
        try:
            return await self._stats_cache.get()
        except Exception as e:
            self._logger.warning("audit_stats_cache_unavailable", extra={"error": repr(e)})
            return None

    async def _store_stats(self, stats: AuditStats, generation: int) -> None:
        try:
            await self._stats_cache.set(stats, generation)
        except Exception as e:
            self._logger.warning("audit_stats_cache_unavailable", extra={"error": repr(e)})
