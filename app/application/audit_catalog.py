"""
Audit entries for every tracked business operation.

Each mutating operation builds its entry here and hands it to AuditWriter.record()
once its own primary effect has committed. Keeping the wording in one place keeps
the log consistent across user management, the software inventory and login.
"""

from typing import Optional

from app.domain.models.audit_event import AuditEntry, AuditEventType
from app.security.principal import Actor


def _entry(actor: Actor, action: str, details: str, event_type: AuditEventType) -> AuditEntry:
    return AuditEntry(
        actor_id=actor.id,
        actor_name=actor.name,
        action=action,
        details=details,
        event_type=event_type,
    )


# --- User management ---


def user_created(actor: Actor, user_name: str, role: str) -> AuditEntry:
    return _entry(
        actor,
        "User created",
        f"User '{user_name}' was created with role {role}",
        AuditEventType.CREATE,
    )


def user_updated(actor: Actor, user_name: str) -> AuditEntry:
    return _entry(actor, "User updated", f"User '{user_name}' was updated", AuditEventType.UPDATE)


def password_reset(actor: Actor, user_name: str) -> AuditEntry:
    return _entry(
        actor,
        "Password reset",
        f"Password for user '{user_name}' was reset",
        AuditEventType.UPDATE,
    )


def user_deleted(actor: Actor, user_name: str) -> AuditEntry:
    return _entry(
        actor,
        "User deleted",
        f"User '{user_name}' was removed from the system",
        AuditEventType.DELETE,
    )


# --- Software inventory ---


def software_created(actor: Actor, service_name: str) -> AuditEntry:
    return _entry(
        actor,
        "Software created",
        f"'{service_name}' was added to the inventory",
        AuditEventType.CREATE,
    )


def software_updated(actor: Actor, service_name: str) -> AuditEntry:
    return _entry(
        actor,
        "Software updated",
        f"'{service_name}' was updated",
        AuditEventType.UPDATE,
    )


def software_deleted(actor: Actor, service_name: str) -> AuditEntry:
    return _entry(
        actor,
        "Software deleted",
        f"'{service_name}' was removed from the inventory",
        AuditEventType.DELETE,
    )


def software_exported(actor: Actor, record_count: int, export_format: str = "CSV") -> AuditEntry:
    return _entry(
        actor,
        "Software exported",
        f"Exported {record_count} software records as {export_format}",
        AuditEventType.EXPORT,
    )


def filter_applied(actor: Actor, description: str) -> AuditEntry:
    return _entry(actor, "Filter applied", description, AuditEventType.FILTER)


# --- Authentication ---


def login_succeeded(actor: Actor) -> AuditEntry:
    return _entry(actor, "Login", "Successful login", AuditEventType.LOGIN)


def login_failed(attempted_name: str, reason: Optional[str] = None) -> AuditEntry:
    """Pre-authentication event: there is no principal yet, so no actor_id."""
    details = "Failed login attempt"
    if reason:
        details = f"{details}: {reason}"
    return AuditEntry(
        actor_id=None,
        actor_name=attempted_name,
        action="Login failed",
        details=details,
        event_type=AuditEventType.LOGIN,
    )
