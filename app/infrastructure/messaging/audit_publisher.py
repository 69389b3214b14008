"""Publishes recorded audit events to a topic exchange for downstream security tooling."""

from typing import Any, Dict

from app.domain.models.audit_event import AuditEvent
from app.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher

EXCHANGE_AUDIT_EVENTS = "audit_events"


def routing_key_for(event: AuditEvent) -> str:
    return f"audit.{event.event_type.value}"


def event_message(event: AuditEvent) -> Dict[str, Any]:
    return {
        "id": str(event.id),
        "actor_id": event.actor_id,
        "actor_name": event.actor_name,
        "action": event.action,
        "details": event.details,
        "type": event.event_type.value,
        "created_at": event.created_at.isoformat(),
    }


class RabbitMQAuditPublisher:
    """Implements AuditEventPublisher. Message id is the event id, so consumers can dedupe."""

    def __init__(self, publisher: RabbitMQPublisher) -> None:
        self._publisher = publisher

    async def publish_event(self, event: AuditEvent) -> None:
        await self._publisher.publish(
            EXCHANGE_AUDIT_EVENTS,
            routing_key_for(event),
            event_message(event),
            str(event.id),
        )
