"""Shared pytest fixtures for the taskboard test suite.

Design philosophy
-----------------
- Everything runs against SQLite in-memory (``StaticPool``) so the suite
  needs no external services.
- Fixtures are async where the code under test is async.
- Scope stays at "function" so every test gets an empty database.
- HTTP tests drive the real app through ``httpx.ASGITransport``; the
  manager is initialised by the fixture because the transport does not run
  the lifespan.
"""
from __future__ import annotations

import httpx
import pytest

from taskboard.app import create_app
from taskboard.core.config import BoardConfig
from taskboard.core.schemas import ProjectCreate
from taskboard.facade import ProjectFacade
from taskboard.manager import BoardManager
from taskboard.storage.database import Database
from taskboard.stores import PeopleStore, ProjectStore

MEMORY_URL = "sqlite+aiosqlite:///:memory:"

# ---------------------------------------------------------------------------
# Database and session
# ---------------------------------------------------------------------------

@pytest.fixture
async def database():
    db = Database(MEMORY_URL)
    await db.initialize()
    yield db
    await db.close()


@pytest.fixture
async def session(database: Database):
    async with database.session() as s:
        yield s


@pytest.fixture
async def people(session) -> dict[str, str]:
    """Seed two people; returns ``{id: name}``."""
    store = PeopleStore(session)
    await store.create("Alice", "alice@example.com", person_id="u1")
    await store.create("Bob", person_id="u2")
    return {"u1": "Alice", "u2": "Bob"}


@pytest.fixture
async def project(session):
    return await ProjectStore(session).create(ProjectCreate(name="Website relaunch"))


@pytest.fixture
def board(session) -> ProjectFacade:
    return ProjectFacade(session)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> BoardConfig:
    return BoardConfig(database_url=MEMORY_URL)


@pytest.fixture
async def manager(config: BoardConfig):
    async with BoardManager(config) as m:
        async with m.session() as s:
            store = PeopleStore(s)
            await store.create("Alice", person_id="u1")
            await store.create("Bob", person_id="u2")
        yield m


@pytest.fixture
async def client(manager: BoardManager):
    app = create_app(manager=manager)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
