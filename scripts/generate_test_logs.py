# scripts/generate_test_logs.py
"""Seed the audit log with random events for the first admin user over the last 72 hours."""

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import random
import uuid
from datetime import timedelta

from sqlalchemy import select

from app.application.audit_store import AuditCriteria
from app.core.clock import utc_now
from app.domain.models.audit_event import AuditEvent, AuditEventType
from app.infrastructure.database.audit_store_db import DbAuditStore
from app.infrastructure.database.models import User
from app.infrastructure.database.session import get_engine, get_session_factory

LOG_COUNT = 20
WINDOW_HOURS = 72

SAMPLE_EVENTS = [
    (AuditEventType.LOGIN, "Login", "Successful login via web form"),
    (AuditEventType.CREATE, "Software created", "'Microsoft 365' was added to the inventory"),
    (AuditEventType.UPDATE, "Software updated", "Security settings for 'Slack' were updated"),
    (AuditEventType.DELETE, "Software deleted", "Legacy software removed from the inventory"),
    (AuditEventType.EXPORT, "Software exported", "Exported software report as CSV"),
    (AuditEventType.FILTER, "Filter applied", "Filtered software by criticality High"),
]


async def generate_test_logs():
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await session.execute(select(User).where(User.role == "admin").limit(1))
        admin = result.scalar_one_or_none()

    if admin is None:
        print("No admin user found")
        return

    # Backdated timestamps, so events go straight to the store rather than through AuditWriter.
    store = DbAuditStore(session_factory)
    now = utc_now()
    for _ in range(LOG_COUNT):
        event_type, action, details = random.choice(SAMPLE_EVENTS)
        await store.insert(
            AuditEvent(
                id=uuid.uuid4(),
                actor_id=admin.id,
                actor_name=admin.name,
                action=action,
                details=details,
                event_type=event_type,
                created_at=now - timedelta(hours=random.randrange(WINDOW_HOURS)),
            )
        )

    print(f"{LOG_COUNT} test logs created")
    print("Total logs:", await store.count(AuditCriteria()))
    await get_engine().dispose()

asyncio.run(generate_test_logs())
