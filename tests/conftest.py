"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fixed_clock: Deterministic, advancing clock for NoteStore
    ├── store: Empty NoteStore driven by fixed_clock
    ├── app: FastAPI app serving `store`
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before notes_api.config is imported.
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["API_PREFIX"] = "/api"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

class FixedClock:
    """Returns 2024-01-15T12:00:00Z, one second later on every call."""

    def __init__(self):
        self.current = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def store(fixed_clock):
    """An empty NoteStore with a deterministic clock."""
    from notes_api.services.note_store import NoteStore
    return NoteStore(clock=fixed_clock)


@pytest.fixture
def app(store):
    """A fresh application serving the `store` fixture."""
    from notes_api.main import create_app
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
