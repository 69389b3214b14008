"""Domain schemas. Response models for the audit API."""

from app.domain.schemas.audit import (
    ActionStatResponse,
    ActorResponse,
    AuditEventResponse,
    AuditLogPageResponse,
    AuditStatsResponse,
    PaginationResponse,
    UserStatResponse,
)

__all__ = [
    "ActionStatResponse",
    "ActorResponse",
    "AuditEventResponse",
    "AuditLogPageResponse",
    "AuditStatsResponse",
    "PaginationResponse",
    "UserStatResponse",
]
