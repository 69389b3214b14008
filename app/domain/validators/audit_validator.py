"""Validators for audit entries. Pure functions, no infrastructure or DB access."""

from typing import Any, Optional

from app.domain.exceptions import DomainValidationError, InvalidAuditEventTypeError
from app.domain.models.audit_event import AuditEntry, AuditEventType


def validate_event_type(value: Any) -> AuditEventType:
    """Coerce value to AuditEventType. Raises InvalidAuditEventTypeError if outside the set."""
    if isinstance(value, AuditEventType):
        return value
    try:
        return AuditEventType(value)
    except ValueError as e:
        allowed = ", ".join(t.value for t in AuditEventType)
        raise InvalidAuditEventTypeError(
            f"event_type must be one of: {allowed}; got {value!r}"
        ) from e


def _require_text(field: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainValidationError(f"{field} must be a non-empty string")


def validate_actor_id(actor_id: Optional[str]) -> None:
    """actor_id is optional, but when present it must not be blank."""
    if actor_id is None:
        return
    _require_text("actor_id", actor_id)


def validate_audit_entry(entry: AuditEntry) -> AuditEntry:
    """
    Validate an audit entry before persistence: actor_name and action non-empty,
    details a string (empty allowed), event_type in the closed set.
    Returns the entry with event_type normalized to the enum.
    """
    _require_text("actor_name", entry.actor_name)
    _require_text("action", entry.action)
    if not isinstance(entry.details, str):
        raise DomainValidationError("details must be a string")
    validate_actor_id(entry.actor_id)
    event_type = validate_event_type(entry.event_type)
    if event_type is entry.event_type:
        return entry
    return AuditEntry(
        actor_name=entry.actor_name,
        action=entry.action,
        details=entry.details,
        event_type=event_type,
        actor_id=entry.actor_id,
    )
