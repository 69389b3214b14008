"""Domain validators. Pure validation functions."""

from app.domain.validators.audit_validator import (
    validate_actor_id,
    validate_audit_entry,
    validate_event_type,
)

__all__ = [
    "validate_actor_id",
    "validate_audit_entry",
    "validate_event_type",
]
