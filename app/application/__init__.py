# Application layer: services that orchestrate domain and infrastructure.

from app.application.audit_query import AuditLogItem, AuditPage, AuditQuery, AuditQueryEngine, Pagination
from app.application.audit_stats import ActionStat, AuditStats, StatsCache, UserStat
from app.application.audit_store import ActorDirectory, AuditCriteria, AuditStore
from app.application.audit_writer import AuditEventPublisher, AuditWriter
from app.application.exceptions import ApplicationError, AuditQueryError

__all__ = [
    "ActionStat",
    "ActorDirectory",
    "ApplicationError",
    "AuditCriteria",
    "AuditEventPublisher",
    "AuditLogItem",
    "AuditPage",
    "AuditQuery",
    "AuditQueryEngine",
    "AuditQueryError",
    "AuditStats",
    "AuditStore",
    "AuditWriter",
    "Pagination",
    "StatsCache",
    "UserStat",
]
