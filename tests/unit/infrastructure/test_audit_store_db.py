"""DbAuditStore / DbActorDirectory against SQLite (aiosqlite): SQL filters, ordering, grouping."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from app.application.audit_query import AuditQuery, AuditQueryEngine
from app.application.audit_store import AuditCriteria
from app.application.audit_writer import AuditWriter
from app.domain.models.audit_event import ActorSummary, AuditEntry, AuditEvent, AuditEventType
from app.infrastructure.database.audit_store_db import DbActorDirectory, DbAuditStore
from app.infrastructure.database.models import User
from app.infrastructure.database.session import Base, build_engine, build_session_factory

BASE = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


def _event(
    actor_name: str = "Alice Smith",
    event_type: AuditEventType = AuditEventType.CREATE,
    created_at: datetime = BASE,
    actor_id: str | None = "u-alice",
    action: str = "action",
) -> AuditEvent:
    return AuditEvent(
        id=uuid.uuid4(),
        actor_id=actor_id,
        actor_name=actor_name,
        action=action,
        details="details",
        event_type=event_type,
        created_at=created_at,
    )


@pytest.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'audit.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def store(session_factory):
    return DbAuditStore(session_factory)


async def test_insert_and_read_back(store):
    event = _event()
    await store.insert(event)

    [stored] = await store.find(AuditCriteria(), offset=0, limit=10)

    assert stored.id == event.id
    assert stored.actor_id == "u-alice"
    assert stored.actor_name == "Alice Smith"
    assert stored.details == "details"
    assert stored.event_type is AuditEventType.CREATE
    assert stored.created_at == BASE
    assert stored.created_at.tzinfo is not None


async def test_non_utc_timestamps_are_normalized(store):
    local = timezone(timedelta(hours=2))
    await store.insert(_event(created_at=datetime(2026, 10, 19, 11, 0, tzinfo=local)))
    [stored] = await store.find(AuditCriteria(), offset=0, limit=1)
    assert stored.created_at == BASE


async def test_order_is_created_at_desc_then_newest_insert(store):
    await store.insert(_event(action="old", created_at=BASE - timedelta(hours=1)))
    await store.insert(_event(action="tie-1", created_at=BASE))
    await store.insert(_event(action="tie-2", created_at=BASE))
    await store.insert(_event(action="new", created_at=BASE + timedelta(hours=1)))

    events = await store.find(AuditCriteria(), offset=0, limit=10)

    assert [e.action for e in events] == ["new", "tie-2", "tie-1", "old"]


async def test_offset_and_limit(store):
    for i in range(15):
        await store.insert(_event(created_at=BASE + timedelta(minutes=i)))
    assert len(await store.find(AuditCriteria(), offset=10, limit=10)) == 5
    assert await store.count(AuditCriteria()) == 15


async def test_actor_name_filter_is_case_insensitive(store):
    await store.insert(_event(actor_name="Alice Smith"))
    await store.insert(_event(actor_name="Bob"))
    assert await store.count(AuditCriteria(actor_name_contains="ALI")) == 1


async def test_actor_name_wildcards_are_literal(store):
    await store.insert(_event(actor_name="100% Admin"))
    await store.insert(_event(actor_name="1000 Admin"))
    await store.insert(_event(actor_name="a_b"))
    await store.insert(_event(actor_name="axb"))
    assert await store.count(AuditCriteria(actor_name_contains="0%")) == 1
    assert await store.count(AuditCriteria(actor_name_contains="a_b")) == 1


async def test_combined_criteria(store):
    await store.insert(_event(actor_id="u-1", event_type=AuditEventType.DELETE, created_at=BASE))
    await store.insert(_event(actor_id="u-1", event_type=AuditEventType.CREATE, created_at=BASE))
    await store.insert(_event(actor_id="u-2", event_type=AuditEventType.DELETE, created_at=BASE))
    await store.insert(_event(actor_id="u-1", event_type=AuditEventType.DELETE, created_at=BASE - timedelta(days=2)))

    criteria = AuditCriteria(
        actor_id="u-1",
        event_type=AuditEventType.DELETE,
        created_from=BASE - timedelta(days=1),
        created_to=BASE,
    )
    assert await store.count(criteria) == 1


async def test_date_bounds_accept_other_timezones(store):
    await store.insert(_event(created_at=BASE))
    local = timezone(timedelta(hours=-3))
    # BASE is 06:00 at UTC-3
    assert await store.count(AuditCriteria(created_from=datetime(2026, 10, 19, 6, 0, tzinfo=local))) == 1
    assert await store.count(AuditCriteria(created_from=datetime(2026, 10, 19, 6, 1, tzinfo=local))) == 0


async def test_count_by_actor_name(store):
    for name, n in (("Carol", 2), ("Alice", 3), ("Bob", 2)):
        for _ in range(n):
            await store.insert(_event(actor_name=name))

    assert await store.count_by_actor_name(limit=10) == [("Alice", 3), ("Bob", 2), ("Carol", 2)]
    assert await store.count_by_actor_name(limit=1) == [("Alice", 3)]


async def test_count_by_type(store):
    for t in (AuditEventType.UPDATE, AuditEventType.CREATE, AuditEventType.CREATE):
        await store.insert(_event(event_type=t))

    assert await store.count_by_type() == [(AuditEventType.CREATE, 2), (AuditEventType.UPDATE, 1)]


async def test_actor_directory_lookup(session_factory):
    async with session_factory() as session:
        session.add(User(id="u-alice", name="Alice", email="alice@example.com", role="admin"))
        await session.commit()
    directory = DbActorDirectory(session_factory)

    found = await directory.lookup(["u-alice", "u-gone"])

    assert found == {"u-alice": ActorSummary(id="u-alice", name="Alice", email="alice@example.com")}
    assert await directory.lookup([]) == {}


async def test_writer_and_engine_end_to_end(session_factory, store):
    async with session_factory() as session:
        session.add(User(id="u-alice", name="Alice", email="alice@example.com", role="admin"))
        await session.commit()
    writer = AuditWriter(store=store, logger=MagicMock())
    engine = AuditQueryEngine(
        store=store,
        logger=MagicMock(),
        directory=DbActorDirectory(session_factory),
        timezone=timezone.utc,
    )
    for i in range(15):
        await writer.record(
            AuditEntry(
                actor_id="u-alice" if i % 2 else "u-deleted",
                actor_name="Alice Smith",
                action=f"action-{i}",
                details="",
                event_type=AuditEventType.UPDATE,
            )
        )

    page = await engine.query(AuditQuery(actor_name="ali", page=2, limit=10))

    assert len(page.data) == 5
    assert page.pagination.pages == 2
    assert page.pagination.total == 15
    enriched = [i for i in page.data if i.actor is not None]
    assert enriched and all(i.event.actor_id == "u-alice" for i in enriched)
    assert (await engine.stats()).action_stats[0].count == 15
