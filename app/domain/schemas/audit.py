"""Pydantic schemas for the audit API. Strict typing, no DB or infrastructure."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.domain.models.audit_event import AuditEventType


class ActorResponse(BaseModel):
    """Live identity of the actor, present only while the user still exists."""

    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuditEventResponse(BaseModel):
    """One audit event. actor_name is the name captured at write time."""

    id: UUID
    actor_id: Optional[str] = None
    actor_name: str
    action: str
    details: str
    type: AuditEventType
    created_at: datetime
    actor: Optional[ActorResponse] = None


class PaginationResponse(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)


class AuditLogPageResponse(BaseModel):
    """Response for GET /audit."""

    data: List[AuditEventResponse]
    pagination: PaginationResponse


class UserStatResponse(BaseModel):
    actor_name: str
    count: int


class ActionStatResponse(BaseModel):
    type: AuditEventType
    count: int


class AuditStatsResponse(BaseModel):
    """Response for GET /audit/stats."""

    total_logs: int
    today_logs: int
    user_stats: List[UserStatResponse]
    action_stats: List[ActionStatResponse]
