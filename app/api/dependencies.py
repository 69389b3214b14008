"""FastAPI dependency injection: audit store, caches, publisher, writer, query engine, acting principal."""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.application.audit_query import AuditQueryEngine
from app.application.audit_stats import StatsCache
from app.application.audit_store import ActorDirectory, AuditStore
from app.application.audit_writer import AuditEventPublisher, AuditWriter
from app.config.settings import get_settings
from app.core.clock import resolve_timezone
from app.core.context import actor_id_ctx
from app.infrastructure.cache.redis_client import RedisClient
from app.infrastructure.cache.stats_cache_redis import RedisStatsCache
from app.infrastructure.database.audit_store_db import DbActorDirectory, DbAuditStore
from app.infrastructure.database.session import get_session_factory
from app.infrastructure.messaging.audit_publisher import RabbitMQAuditPublisher
from app.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher
from app.security.exceptions import AuthenticationError
from app.security.principal import Actor
from app.security.rbac import VIEW_AUDIT, RBACService, parse_role

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_NAME_HEADER = "X-Actor-Name"
ACTOR_ROLE_HEADER = "X-Actor-Role"
ACTOR_EMAIL_HEADER = "X-Actor-Email"

_redis_client: RedisClient | None = None
_publisher: RabbitMQPublisher | None = None
_rbac = RBACService()


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_publisher() -> RabbitMQPublisher:
    """Return singleton RabbitMQ publisher."""
    global _publisher
    if _publisher is None:
        _publisher = RabbitMQPublisher()
    return _publisher


def get_audit_store() -> AuditStore:
    return DbAuditStore(get_session_factory())


def get_actor_directory() -> ActorDirectory:
    return DbActorDirectory(get_session_factory())


def get_stats_cache() -> Optional[StatsCache]:
    """Redis stats cache, or None when audit_stats_cache_ttl is 0."""
    ttl = get_settings().audit_stats_cache_ttl
    if ttl <= 0:
        return None
    return RedisStatsCache(get_redis_client(), ttl=ttl)


def get_audit_event_publisher() -> Optional[AuditEventPublisher]:
    """Broker fan-out of recorded events, or None unless audit_publish_enabled."""
    if not get_settings().audit_publish_enabled:
        return None
    return RabbitMQAuditPublisher(get_publisher())


def get_audit_writer(
    store: Annotated[AuditStore, Depends(get_audit_store)],
    stats_cache: Annotated[Optional[StatsCache], Depends(get_stats_cache)],
    publisher: Annotated[Optional[AuditEventPublisher], Depends(get_audit_event_publisher)],
) -> AuditWriter:
    """
    AuditWriter for mutating routes; call record() after the primary effect commits.
    Integration point for the user/software/login handlers, which live outside this
    service: they depend on this and pass audit_catalog entries to record().
    """
    return AuditWriter(
        store=store,
        logger=logging.getLogger("app.audit.writer"),
        stats_cache=stats_cache,
        publisher=publisher,
        write_timeout=get_settings().audit_write_timeout_seconds,
    )


def get_audit_query_engine(
    store: Annotated[AuditStore, Depends(get_audit_store)],
    directory: Annotated[ActorDirectory, Depends(get_actor_directory)],
    stats_cache: Annotated[Optional[StatsCache], Depends(get_stats_cache)],
) -> AuditQueryEngine:
    settings = get_settings()
    return AuditQueryEngine(
        store=store,
        logger=logging.getLogger("app.audit.query"),
        directory=directory,
        stats_cache=stats_cache,
        default_limit=settings.audit_default_page_size,
        max_limit=settings.audit_max_page_size,
        timezone=resolve_timezone(settings.audit_timezone),
    )


async def get_current_actor(request: Request) -> Actor:
    """
    Acting principal forwarded by the authenticating gateway.
    Raises AuthenticationError (401) when id, name or role is missing.
    """
    actor_id = (request.headers.get(ACTOR_ID_HEADER) or "").strip()
    name = (request.headers.get(ACTOR_NAME_HEADER) or "").strip()
    role = (request.headers.get(ACTOR_ROLE_HEADER) or "").strip()
    if not actor_id or not name or not role:
        raise AuthenticationError("Authentication required")
    actor = Actor(
        id=actor_id,
        name=name,
        role=parse_role(role),
        email=request.headers.get(ACTOR_EMAIL_HEADER),
    )
    request.state.actor = actor
    actor_id_ctx.set(actor.id)
    return actor


async def require_audit_viewer(actor: Annotated[Actor, Depends(get_current_actor)]) -> Actor:
    """Only roles with view_audit (admin) may read the audit log."""
    _rbac.check_permission(actor.role, VIEW_AUDIT)
    return actor
