"""Fixtures for API unit tests: in-memory audit store and directory, AsyncClient, principal headers."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.domain.models.audit_event import ActorSummary
from app.infrastructure.memory.audit_store_memory import InMemoryActorDirectory, InMemoryAuditStore
from app.main import app


@pytest.fixture
def audit_store():
    return InMemoryAuditStore()


@pytest.fixture
def actor_directory():
    return InMemoryActorDirectory(
        {"u-admin": ActorSummary(id="u-admin", name="Ada Admin", email="ada@example.com")}
    )


@pytest.fixture
def app_with_overrides(audit_store, actor_directory):
    """App with the audit store, actor directory and stats cache overridden for testing."""
    from app.api import dependencies

    app.dependency_overrides[dependencies.get_audit_store] = lambda: audit_store
    app.dependency_overrides[dependencies.get_actor_directory] = lambda: actor_directory
    app.dependency_overrides[dependencies.get_stats_cache] = lambda: None
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers():
    return {"X-Actor-Id": "u-admin", "X-Actor-Name": "Ada Admin", "X-Actor-Role": "admin"}


@pytest.fixture
def editor_headers():
    return {"X-Actor-Id": "u-editor", "X-Actor-Name": "Eddie Editor", "X-Actor-Role": "editor"}
