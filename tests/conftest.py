"""Test-wide environment: settings are read from env on first use, so set them before any app import."""

import os
import time

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-audit.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUDIT_STATS_CACHE_TTL", "0")
os.environ.setdefault("AUDIT_PUBLISH_ENABLED", "false")


@pytest.fixture
def new_york_local_zone(monkeypatch):
    """Run with the process local zone set to America/New_York (EST/EDT)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
