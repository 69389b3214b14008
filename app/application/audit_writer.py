"""Audit writer: records one administrative action. Never fails the operation that triggered it."""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional, Protocol

from app.application.audit_stats import StatsCache
from app.application.audit_store import AuditStore
from app.core.clock import utc_now
from app.domain.models.audit_event import AuditEntry, AuditEvent
from app.domain.validators.audit_validator import validate_audit_entry

DEFAULT_WRITE_TIMEOUT_SECONDS = 5.0


class AuditEventPublisher(Protocol):
    """Optional fan-out of recorded events to external consumers."""

    async def publish_event(self, event: AuditEvent) -> None:
        ...


class AuditWriter:
    """
    Call record() after the business operation's primary effect has committed.

    Failure isolation: validation errors, store errors and timeouts are caught,
    logged as audit_write_failed and dropped. record() returns None in every case,
    so a broken audit store can never turn a successful operation into a failure.
    Cache invalidation and publishing run only after a successful insert and are
    absorbed the same way.

    A timeout does not prove the insert failed: the store may have committed just
    before the deadline. Such writes are still logged as audit_write_failed (with
    timed_out set), and the stats cache is invalidated in case the row landed. The
    event is not published, since its durability is unknown.
    """

    def __init__(
        self,
        store: AuditStore,
        logger: logging.Logger,
        *,
        stats_cache: Optional[StatsCache] = None,
        publisher: Optional[AuditEventPublisher] = None,
        clock: Callable[[], datetime] = utc_now,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT_SECONDS,
    ) -> None:
        self._store = store
        self._logger = logger
        self._stats_cache = stats_cache
        self._publisher = publisher
        self._clock = clock
        self._write_timeout = write_timeout

    async def record(self, entry: AuditEntry) -> None:
        """Persist entry as an AuditEvent with a fresh id and created_at. Never raises."""
        try:
            entry = validate_audit_entry(entry)
            event = AuditEvent(
                id=uuid.uuid4(),
                actor_id=entry.actor_id,
                actor_name=entry.actor_name,
                action=entry.action,
                details=entry.details,
                event_type=entry.event_type,
                created_at=self._clock(),
            )
            await asyncio.wait_for(self._store.insert(event), timeout=self._write_timeout)
        except Exception as e:
            timed_out = isinstance(e, asyncio.TimeoutError)
            self._logger.error(
                "audit_write_failed",
                extra={
                    "audit_actor_id": getattr(entry, "actor_id", None),
                    "actor_name": getattr(entry, "actor_name", None),
                    "action": getattr(entry, "action", None),
                    "event_type": _type_value(getattr(entry, "event_type", None)),
                    "error": repr(e),
                    "timed_out": timed_out,
                },
            )
            if timed_out:
                await self._invalidate_stats()
            return

        self._logger.info(
            "audit_recorded",
            extra={
                "event_id": str(event.id),
                "audit_actor_id": event.actor_id,
                "actor_name": event.actor_name,
                "action": event.action,
                "event_type": event.event_type.value,
            },
        )
        await self._invalidate_stats()
        await self._publish(event)

    async def _invalidate_stats(self) -> None:
        if self._stats_cache is None:
            return
        try:
            await self._stats_cache.invalidate()
        except Exception as e:
            self._logger.warning(
                "audit_stats_cache_unavailable",
                extra={"error": repr(e)},
            )

    async def _publish(self, event: AuditEvent) -> None:
        if self._publisher is None:
            return
        try:
            await self._publisher.publish_event(event)
        except Exception as e:
            # Event is already durable; the broker copy is best-effort.
            self._logger.warning(
                "audit_publish_failed",
                extra={"event_id": str(event.id), "error": repr(e)},
            )


def _type_value(event_type) -> Optional[str]:
    return getattr(event_type, "value", event_type)
