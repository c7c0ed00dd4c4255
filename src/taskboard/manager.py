"""Board manager: lifecycle of the database handle behind the HTTP app.

Lifecycle
---------
1. **Construct**: stores the config and builds the :class:`Database`; no I/O.
2. **initialize()**: creates the board tables.  Safe to call repeatedly.
3. **shutdown()**: disposes the engine.

The recommended integration is :func:`taskboard.app.create_app`, which
installs :meth:`BoardManager.create_lifespan` for you::

    app = create_app(BoardConfig(database_url="postgresql+asyncpg://..."))

Scripts and tests can use the manager directly::

    async with BoardManager(config) as manager:
        async with manager.session() as session:
            project = await ProjectFacade.from_config(session, config).get_project(pid)
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from taskboard.storage.database import Database

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession
    from starlette.types import Lifespan

    from taskboard.core.config import BoardConfig

logger = logging.getLogger(__name__)


class BoardManager:
    """Owns the :class:`~taskboard.storage.database.Database` for one app.

    Parameters
    ----------
    config:
        Validated :class:`~taskboard.core.config.BoardConfig`.
    database:
        Override the database built from ``config.database_url``.  Useful in
        tests that share one in-memory engine between fixtures and the app.
    """

    def __init__(self, config: BoardConfig, *, database: Database | None = None) -> None:
        self.config = config
        self._initialized = False
        self.database = database or Database(
            config.database_url,
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
            pool_recycle=config.database_pool_recycle,
            echo=config.database_echo,
        )
        logger.info("BoardManager created config=%s", config)

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Create the board tables.  Subsequent calls are no-ops."""
        if self._initialized:
            return
        logger.info("BoardManager initialising …")
        await self.database.initialize()
        self._initialized = True
        logger.info("BoardManager initialised")

    async def shutdown(self) -> None:
        """Dispose the engine's connection pool."""
        if not self._initialized:
            return
        logger.info("BoardManager shutting down …")
        await self.database.close()
        self._initialized = False
        logger.info("BoardManager shutdown complete")

    async def __aenter__(self) -> BoardManager:
        await self.initialize()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.shutdown()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield one session; used per request by the HTTP dependencies."""
        async with self.database.session() as session:
            yield session

    async def health_check(self) -> dict[str, Any]:
        """Return ``{status, timestamp, components}`` for the health route."""
        healthy = await self.database.ping()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "components": {
                "database": {
                    "status": "healthy" if healthy else "unhealthy",
                    "dialect": self.database.dialect.value,
                }
            },
        }

    @staticmethod
    def create_lifespan(manager: BoardManager) -> Lifespan[FastAPI]:
        """Build a FastAPI ``lifespan`` that initialises and shuts down *manager*.

        Middleware is registered by :func:`~taskboard.app.create_app` when
        the app is constructed, so the lifespan only performs I/O.
        """

        @asynccontextmanager
        async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
            app.state.board_manager = manager
            await manager.initialize()
            try:
                yield
            finally:
                await manager.shutdown()

        return _lifespan


__all__ = ["BoardManager"]
