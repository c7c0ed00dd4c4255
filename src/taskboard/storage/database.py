"""Async engine and session factory for the board database.

Works with any async SQLAlchemy dialect:
- PostgreSQL + asyncpg (production)
- SQLite + aiosqlite (development / CI)
- MySQL + aiomysql (alternative production)

The :class:`Database` is the explicit persistence handle: stores receive an
``AsyncSession`` opened from it and never reach for a global connection.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskboard.core.exceptions import PersistenceError
from taskboard.storage.models import Base
from taskboard.utils.db_compat import detect_dialect, engine_options, needs_foreign_key_pragma

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """Owns the async engine and hands out sessions.

    Example (SQLite for testing)
    ----------------------------
    .. code-block:: python

        db = Database("sqlite+aiosqlite:///:memory:")
        await db.initialize()
        async with db.session() as session:
            columns = await ColumnStore(session).get(project_id)
        await db.close()
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_recycle: int = 3600,
        echo: bool = False,
    ) -> None:
        self.dialect = detect_dialect(database_url)
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            **engine_options(
                self.dialect,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=pool_recycle,
                echo=echo,
            ),
        )
        if needs_foreign_key_pragma(self.dialect):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database dialect=%s pool_size=%d", self.dialect.value, pool_size)

    async def initialize(self) -> None:
        """Create all board tables if they do not exist (idempotent)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Board tables ready")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; roll back anything left uncommitted on error."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Return True if a trivial statement round-trips."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as exc:
            logger.warning("Database ping failed: %s", exc)
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


async def commit_or_raise(session: AsyncSession, operation: str) -> None:
    """Commit *session*; on failure roll back and raise :class:`PersistenceError`."""
    try:
        await session.commit()
    except Exception as exc:
        await session.rollback()
        logger.error("Commit failed during %s: %s", operation, exc, exc_info=True)
        raise PersistenceError(operation=operation, reason=str(exc)) from exc


__all__ = ["Database", "commit_or_raise"]
