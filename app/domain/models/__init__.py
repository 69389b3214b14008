from app.domain.models.audit_event import ActorSummary, AuditEntry, AuditEvent, AuditEventType

__all__ = [
    "ActorSummary",
    "AuditEntry",
    "AuditEvent",
    "AuditEventType",
]
