"""BoardManager lifecycle tests."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI

from taskboard.core.config import BoardConfig
from taskboard.manager import BoardManager
from taskboard.storage.database import Database

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def make_manager(database: Database | None = None) -> BoardManager:
    return BoardManager(BoardConfig(database_url=MEMORY_URL), database=database)


class TestLifecycle:

    async def test_construct_does_no_io(self) -> None:
        db = MagicMock()
        manager = make_manager(db)
        assert manager.database is db
        assert manager.initialized is False
        db.initialize.assert_not_called()

    async def test_initialize_is_idempotent(self) -> None:
        db = MagicMock()
        db.initialize = AsyncMock()
        db.close = AsyncMock()
        manager = make_manager(db)
        await manager.initialize()
        await manager.initialize()
        db.initialize.assert_awaited_once()
        await manager.shutdown()
        await manager.shutdown()
        db.close.assert_awaited_once()

    async def test_context_manager(self) -> None:
        async with make_manager() as manager:
            assert manager.initialized
            async with manager.session() as session:
                assert session is not None
        assert not manager.initialized


class TestHealth:

    async def test_healthy(self) -> None:
        async with make_manager() as manager:
            health = await manager.health_check()
        assert health["status"] == "healthy"
        assert health["components"]["database"]["dialect"] == "sqlite"
        assert "timestamp" in health

    async def test_unhealthy_when_ping_fails(self) -> None:
        db = MagicMock()
        db.ping = AsyncMock(return_value=False)
        db.dialect.value = "postgresql"
        health = await make_manager(db).health_check()
        assert health["status"] == "unhealthy"


class TestLifespan:

    async def test_lifespan_initialises_and_shuts_down(self) -> None:
        db = MagicMock()
        db.initialize = AsyncMock()
        db.close = AsyncMock()
        manager = make_manager(db)
        app = FastAPI()
        lifespan = BoardManager.create_lifespan(manager)
        async with lifespan(app):
            assert app.state.board_manager is manager
            assert manager.initialized
        assert not manager.initialized
        db.close.assert_awaited_once()
