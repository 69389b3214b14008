"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from app.domain.exceptions import (
    DomainError,
    DomainValidationError,
    InvalidAuditEventTypeError,
)
from app.domain.models import ActorSummary, AuditEntry, AuditEvent, AuditEventType
from app.domain.validators import validate_audit_entry, validate_event_type

__all__ = [
    "ActorSummary",
    "AuditEntry",
    "AuditEvent",
    "AuditEventType",
    "DomainError",
    "DomainValidationError",
    "InvalidAuditEventTypeError",
    "validate_audit_entry",
    "validate_event_type",
]
