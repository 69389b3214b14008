"""Domain model for audit events. Pure business semantics. No ORM or infrastructure."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID


class AuditEventType(str, Enum):
    """Closed category set used for filtering and grouping audit events."""

    LOGIN = "login"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    EXPORT = "export"
    FILTER = "filter"


@dataclass(frozen=True)
class AuditEntry:
    """
    What a business operation asks to have recorded: who did what.
    Identity and timestamp are assigned by the writer, not the caller.
    """

    actor_name: str
    action: str
    details: str
    event_type: AuditEventType
    actor_id: Optional[str] = None


@dataclass(frozen=True)
class AuditEvent:
    """
    Immutable, persisted audit event. There is no update or delete path.
    actor_name is a point-in-time copy; actor_id is a weak reference that may dangle.
    """

    id: UUID
    actor_id: Optional[str]
    actor_name: str
    action: str
    details: str
    event_type: AuditEventType
    created_at: datetime


@dataclass(frozen=True)
class ActorSummary:
    """Live identity of an actor that still exists, attached to events for display."""

    id: str
    name: str
    email: str
