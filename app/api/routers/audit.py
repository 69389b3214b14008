"""Audit API router: GET /audit (filtered, paginated), GET /audit/stats. Admin only."""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_audit_query_engine, require_audit_viewer
from app.application.audit_query import AuditLogItem, AuditPage, AuditQuery, AuditQueryEngine
from app.application.audit_stats import AuditStats
from app.domain.models.audit_event import AuditEventType
from app.domain.schemas.audit import (
    ActionStatResponse,
    ActorResponse,
    AuditEventResponse,
    AuditLogPageResponse,
    AuditStatsResponse,
    PaginationResponse,
    UserStatResponse,
)
from app.security.principal import Actor

router = APIRouter()


def _item_to_response(item: AuditLogItem) -> AuditEventResponse:
    event = item.event
    actor = None
    if item.actor is not None:
        actor = ActorResponse(id=item.actor.id, name=item.actor.name, email=item.actor.email)
    return AuditEventResponse(
        id=event.id,
        actor_id=event.actor_id,
        actor_name=event.actor_name,
        action=event.action,
        details=event.details,
        type=event.event_type,
        created_at=event.created_at,
        actor=actor,
    )


def _page_to_response(page: AuditPage) -> AuditLogPageResponse:
    return AuditLogPageResponse(
        data=[_item_to_response(item) for item in page.data],
        pagination=PaginationResponse(
            page=page.pagination.page,
            limit=page.pagination.limit,
            total=page.pagination.total,
            pages=page.pagination.pages,
        ),
    )


def _stats_to_response(stats: AuditStats) -> AuditStatsResponse:
    return AuditStatsResponse(
        total_logs=stats.total_logs,
        today_logs=stats.today_logs,
        user_stats=[UserStatResponse(actor_name=s.actor_name, count=s.count) for s in stats.user_stats],
        action_stats=[ActionStatResponse(type=s.event_type, count=s.count) for s in stats.action_stats],
    )


@router.get("", response_model=AuditLogPageResponse)
async def list_audit_logs(
    actor: Annotated[Actor, Depends(require_audit_viewer)],
    engine: Annotated[AuditQueryEngine, Depends(get_audit_query_engine)],
    actor_id: Optional[str] = None,
    actor_name: Optional[str] = None,
    event_type: Annotated[Optional[AuditEventType], Query(alias="type")] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = 1,
    limit: Optional[int] = None,
):
    """List audit events, newest first. Out-of-range page/limit are clamped, not rejected."""
    result = await engine.query(
        AuditQuery(
            actor_id=actor_id,
            actor_name=actor_name,
            event_type=event_type,
            start_date=start_date,
            end_date=end_date,
            page=page,
            limit=limit,
        )
    )
    return _page_to_response(result)


@router.get("/stats", response_model=AuditStatsResponse)
async def audit_stats(
    actor: Annotated[Actor, Depends(require_audit_viewer)],
    engine: Annotated[AuditQueryEngine, Depends(get_audit_query_engine)],
):
    """Total events, today's events, top 10 actors and counts per type."""
    return _stats_to_response(await engine.stats())
