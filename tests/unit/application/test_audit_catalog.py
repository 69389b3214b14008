"""Catalog tests: every tracked operation yields a valid, attributed entry of the right type."""

import pytest

from app.application import audit_catalog
from app.domain.models.audit_event import AuditEventType
from app.domain.validators.audit_validator import validate_audit_entry
from app.security.principal import Actor
from app.security.rbac import Role

ADMIN = Actor(id="u-admin", name="Ada Admin", role=Role.ADMIN)


@pytest.mark.parametrize(
    "build,expected_type",
    [
        (lambda: audit_catalog.user_created(ADMIN, "Bob", "editor"), AuditEventType.CREATE),
        (lambda: audit_catalog.user_updated(ADMIN, "Bob"), AuditEventType.UPDATE),
        (lambda: audit_catalog.password_reset(ADMIN, "Bob"), AuditEventType.UPDATE),
        (lambda: audit_catalog.user_deleted(ADMIN, "Bob"), AuditEventType.DELETE),
        (lambda: audit_catalog.software_created(ADMIN, "Slack"), AuditEventType.CREATE),
        (lambda: audit_catalog.software_updated(ADMIN, "Slack"), AuditEventType.UPDATE),
        (lambda: audit_catalog.software_deleted(ADMIN, "Slack"), AuditEventType.DELETE),
        (lambda: audit_catalog.software_exported(ADMIN, 12), AuditEventType.EXPORT),
        (lambda: audit_catalog.filter_applied(ADMIN, "criticality=High"), AuditEventType.FILTER),
        (lambda: audit_catalog.login_succeeded(ADMIN), AuditEventType.LOGIN),
    ],
)
def test_actor_attributed_entries(build, expected_type):
    entry = build()
    assert validate_audit_entry(entry) is entry
    assert entry.event_type is expected_type
    assert entry.actor_id == "u-admin"
    assert entry.actor_name == "Ada Admin"


def test_user_created_mentions_name_and_role():
    entry = audit_catalog.user_created(ADMIN, "Bob", "editor")
    assert "Bob" in entry.details
    assert "editor" in entry.details


def test_software_exported_mentions_count_and_format():
    entry = audit_catalog.software_exported(ADMIN, 12, "CSV")
    assert entry.details == "Exported 12 software records as CSV"


def test_login_failed_has_no_actor_id():
    entry = audit_catalog.login_failed("mallory@example.com", "invalid password")
    validate_audit_entry(entry)
    assert entry.actor_id is None
    assert entry.actor_name == "mallory@example.com"
    assert entry.event_type is AuditEventType.LOGIN
    assert entry.details.endswith("invalid password")
