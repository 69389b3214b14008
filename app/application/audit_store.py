"""Audit store and actor directory protocols. Application layer depends on these; infrastructure implements them."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from app.domain.models.audit_event import ActorSummary, AuditEvent, AuditEventType


@dataclass(frozen=True)
class AuditCriteria:
    """
    Store-level predicate. Every field that is set must hold (AND).
    Datetimes are timezone-aware; both bounds are inclusive.
    """

    actor_id: Optional[str] = None
    actor_name_contains: Optional[str] = None
    event_type: Optional[AuditEventType] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None


class AuditStore(Protocol):
    """Append-only audit event store. There is intentionally no update or delete."""

    async def insert(self, event: AuditEvent) -> None:
        """Persist one event durably."""
        ...

    async def find(
        self,
        criteria: AuditCriteria,
        *,
        offset: int,
        limit: int,
    ) -> List[AuditEvent]:
        """Matching events, created_at descending, ties newest-insert first."""
        ...

    async def count(self, criteria: AuditCriteria) -> int:
        ...

    async def count_by_actor_name(self, *, limit: int) -> List[Tuple[str, int]]:
        """(actor_name, count) pairs, count descending then actor_name ascending."""
        ...

    async def count_by_type(self) -> List[Tuple[AuditEventType, int]]:
        """(event_type, count) for every type present, ordered by type value."""
        ...


class ActorDirectory(Protocol):
    """Live lookup of users referenced by audit events."""

    async def lookup(self, actor_ids: Iterable[str]) -> Dict[str, ActorSummary]:
        """Return summaries for the ids that still exist; missing ids are absent."""
        ...
