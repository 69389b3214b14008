"""In-memory audit store and actor directory. Embedded use and tests; not durable across restarts."""

import asyncio
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from app.application.audit_store import AuditCriteria
from app.domain.models.audit_event import ActorSummary, AuditEvent, AuditEventType


def _matches(event: AuditEvent, criteria: AuditCriteria) -> bool:
    if criteria.actor_id is not None and event.actor_id != criteria.actor_id:
        return False
    if criteria.actor_name_contains is not None:
        if criteria.actor_name_contains.casefold() not in event.actor_name.casefold():
            return False
    if criteria.event_type is not None and event.event_type != criteria.event_type:
        return False
    if criteria.created_from is not None and event.created_at < criteria.created_from:
        return False
    if criteria.created_to is not None and event.created_at > criteria.created_to:
        return False
    return True


class InMemoryAuditStore:
    """Implements AuditStore over a list. Insert order is the tie-breaker for equal created_at."""

    def __init__(self) -> None:
        self._events: List[Tuple[int, AuditEvent]] = []
        self._lock = asyncio.Lock()

    async def insert(self, event: AuditEvent) -> None:
        async with self._lock:
            self._events.append((len(self._events), event))

    def _snapshot(self) -> List[Tuple[int, AuditEvent]]:
        return list(self._events)

    async def find(
        self,
        criteria: AuditCriteria,
        *,
        offset: int,
        limit: int,
    ) -> List[AuditEvent]:
        matching = [(seq, e) for seq, e in self._snapshot() if _matches(e, criteria)]
        matching.sort(key=lambda item: (item[1].created_at, item[0]), reverse=True)
        return [e for _, e in matching[offset : offset + limit]]

    async def count(self, criteria: AuditCriteria) -> int:
        return sum(1 for _, e in self._snapshot() if _matches(e, criteria))

    async def count_by_actor_name(self, *, limit: int) -> List[Tuple[str, int]]:
        counts = Counter(e.actor_name for _, e in self._snapshot())
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:limit]

    async def count_by_type(self) -> List[Tuple[AuditEventType, int]]:
        counts = Counter(e.event_type for _, e in self._snapshot())
        return sorted(counts.items(), key=lambda item: item[0].value)


class InMemoryActorDirectory:
    """Implements ActorDirectory over a dict of known users."""

    def __init__(self, actors: Optional[Dict[str, ActorSummary]] = None) -> None:
        self._actors: Dict[str, ActorSummary] = dict(actors or {})

    def add(self, actor: ActorSummary) -> None:
        self._actors[actor.id] = actor

    def remove(self, actor_id: str) -> None:
        self._actors.pop(actor_id, None)

    async def lookup(self, actor_ids: Iterable[str]) -> Dict[str, ActorSummary]:
        return {i: self._actors[i] for i in set(actor_ids) if i in self._actors}
