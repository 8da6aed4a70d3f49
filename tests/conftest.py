"""
BlockNotes — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment overrides are applied before any blocknotes import so the
       settings singleton and the engine point at a throwaway SQLite file.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── sample_note:     a Note ORM instance with block content
    ├── scalar_result:   factory for single-row select results
    ├── database:        tables created on the SQLite file, dropped afterwards
    ├── test_client:     httpx AsyncClient over ASGITransport(app)
    ├── api_client:      NotesApiClient talking to the same in-process app
    └── manual_loop:     timer loop advanced by hand for debounce tests
"""

import asyncio
import functools
import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Callable, List
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (must run before blocknotes is imported)
# ══════════════════════════════════════════════════════════════════════════

_db_dir = tempfile.mkdtemp(prefix="blocknotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# Manual timer loop
# ══════════════════════════════════════════════════════════════════════════


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], Any]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualLoop:
    """
    Stand-in for the event loop's timer API.

    call_later() only records the timer; advance() moves the clock and fires
    due timers in order. create_task() hands coroutines to the real loop, so
    tests await them with the object's own wait helpers.
    """

    def __init__(self):
        self.now = 0.0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable, *args) -> ManualTimer:
        timer = ManualTimer(self.now + delay, functools.partial(callback, *args))
        self.timers.append(timer)
        return timer

    def create_task(self, coro):
        return asyncio.get_running_loop().create_task(coro)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.cancelled and t.when <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target


@pytest.fixture
def manual_loop():
    return ManualLoop()


# ══════════════════════════════════════════════════════════════════════════
# Service-level fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.get_note(mock_db_session, str(note.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note():
    from blocknotes.models.note import Note

    now = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)
    return Note(
        id=uuid4(),
        title="Groceries",
        content=[
            {"id": "b1", "type": "heading", "content": {"text": "Shopping", "level": 2}},
            {"id": "b2", "type": "todo", "content": {"text": "milk", "checked": False}},
        ],
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def scalar_result():
    """Factory for MagicMocks shaped like the Result of a single-row select."""
    def make(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        return result
    return make


# ══════════════════════════════════════════════════════════════════════════
# HTTP fixtures (real app, SQLite database)
# ══════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def database():
    """Fresh notes table for each test; ASGITransport does not run lifespan."""
    from blocknotes.database import Base, create_tables, engine
    from blocknotes.models import note  # noqa: F401

    await create_tables()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from blocknotes.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api_client(database):
    """NotesApiClient bound to the in-process app."""
    from blocknotes.client.api_client import NotesApiClient
    from blocknotes.main import app

    client = NotesApiClient(base_url="http://test", transport=ASGITransport(app=app))
    yield client
    await client.aclose()
