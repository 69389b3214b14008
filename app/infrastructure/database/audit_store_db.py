"""DB-backed audit store. Persists audit events to the audit_logs table."""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.application.audit_store import AuditCriteria
from app.domain.models.audit_event import ActorSummary, AuditEvent, AuditEventType
from app.infrastructure.database.models import AuditLog, User

_LIKE_ESCAPE = "\\"


def _to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def _from_db(value: datetime) -> datetime:
    # Some backends (SQLite) hand back naive values; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _like_pattern(fragment: str) -> str:
    escaped = (
        fragment.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _predicates(criteria: AuditCriteria) -> list:
    clauses = []
    if criteria.actor_id is not None:
        clauses.append(AuditLog.actor_id == criteria.actor_id)
    if criteria.actor_name_contains is not None:
        clauses.append(
            AuditLog.actor_name.ilike(_like_pattern(criteria.actor_name_contains), escape=_LIKE_ESCAPE)
        )
    if criteria.event_type is not None:
        clauses.append(AuditLog.event_type == criteria.event_type.value)
    if criteria.created_from is not None:
        clauses.append(AuditLog.created_at >= _to_utc(criteria.created_from))
    if criteria.created_to is not None:
        clauses.append(AuditLog.created_at <= _to_utc(criteria.created_to))
    return clauses


def _to_domain(orm: AuditLog) -> AuditEvent:
    return AuditEvent(
        id=orm.id,
        actor_id=orm.actor_id,
        actor_name=orm.actor_name,
        action=orm.action,
        details=orm.details,
        event_type=AuditEventType(orm.event_type),
        created_at=_from_db(orm.created_at),
    )


class DbAuditStore:
    """
    Implements AuditStore over SQLAlchemy. Each call uses its own session, so an
    audit insert never shares a transaction with the caller's business writes.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def insert(self, event: AuditEvent) -> None:
        orm = AuditLog(
            id=event.id,
            actor_id=event.actor_id,
            actor_name=event.actor_name,
            action=event.action,
            details=event.details,
            event_type=event.event_type.value,
            created_at=_to_utc(event.created_at),
        )
        async with self._session_factory() as session:
            session.add(orm)
            await session.commit()

    async def find(
        self,
        criteria: AuditCriteria,
        *,
        offset: int,
        limit: int,
    ) -> List[AuditEvent]:
        stmt = (
            select(AuditLog)
            .where(*_predicates(criteria))
            .order_by(AuditLog.created_at.desc(), AuditLog.seq.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_to_domain(orm) for orm in result.scalars().all()]

    async def count(self, criteria: AuditCriteria) -> int:
        stmt = select(func.count(AuditLog.seq)).where(*_predicates(criteria))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def count_by_actor_name(self, *, limit: int) -> List[Tuple[str, int]]:
        count_col = func.count(AuditLog.seq).label("count")
        stmt = (
            select(AuditLog.actor_name, count_col)
            .group_by(AuditLog.actor_name)
            .order_by(count_col.desc(), AuditLog.actor_name.asc())
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [(name, int(count)) for name, count in result.all()]

    async def count_by_type(self) -> List[Tuple[AuditEventType, int]]:
        stmt = (
            select(AuditLog.event_type, func.count(AuditLog.seq))
            .group_by(AuditLog.event_type)
            .order_by(AuditLog.event_type.asc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [(AuditEventType(value), int(count)) for value, count in result.all()]


class DbActorDirectory:
    """Implements ActorDirectory over the users table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def lookup(self, actor_ids: Iterable[str]) -> Dict[str, ActorSummary]:
        ids = list(set(actor_ids))
        if not ids:
            return {}
        stmt = select(User.id, User.name, User.email).where(User.id.in_(ids))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return {
                user_id: ActorSummary(id=user_id, name=name, email=email)
                for user_id, name, email in result.all()
            }
