"""Aggregate statistics over the audit log, and the cache protocol that may hold them."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from app.domain.models.audit_event import AuditEventType


@dataclass(frozen=True)
class UserStat:
    actor_name: str
    count: int


@dataclass(frozen=True)
class ActionStat:
    event_type: AuditEventType
    count: int


@dataclass(frozen=True)
class AuditStats:
    total_logs: int
    today_logs: int
    user_stats: List[UserStat] = field(default_factory=list)
    action_stats: List[ActionStat] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible representation (used for caching)."""
        return {
            "total_logs": self.total_logs,
            "today_logs": self.today_logs,
            "user_stats": [
                {"actor_name": s.actor_name, "count": s.count} for s in self.user_stats
            ],
            "action_stats": [
                {"type": s.event_type.value, "count": s.count} for s in self.action_stats
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditStats":
        return cls(
            total_logs=int(data["total_logs"]),
            today_logs=int(data["today_logs"]),
            user_stats=[
                UserStat(actor_name=s["actor_name"], count=int(s["count"]))
                for s in data["user_stats"]
            ],
            action_stats=[
                ActionStat(event_type=AuditEventType(s["type"]), count=int(s["count"]))
                for s in data["action_stats"]
            ],
        )


class StatsCache(Protocol):
    """
    Short-lived cache for AuditStats. Implementations may raise; callers absorb.

    Every invalidate() bumps a generation counter. set() tags the snapshot with the
    generation read before the stats were computed, and get() only returns a
    snapshot whose tag matches the current generation, so a computation that
    raced with a write can never be served after that write's invalidation.
    """

    async def generation(self) -> int:
        ...

    async def get(self) -> Optional[AuditStats]:
        ...

    async def set(self, stats: AuditStats, generation: int) -> None:
        ...

    async def invalidate(self) -> None:
        ...
