"""FastAPI dependency-injection helpers for the board routes."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.facade import ProjectFacade
from taskboard.manager import BoardManager


def get_board_manager(request: Request) -> BoardManager:
    manager = getattr(request.app.state, "board_manager", None)
    if manager is None:
        raise RuntimeError(
            "board_manager not found on app.state. "
            "Did you build the app with taskboard.create_app()?"
        )
    return manager


async def get_board_session(
    manager: Annotated[BoardManager, Depends(get_board_manager)],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield one session for the duration of the request.

    Example
    -------
    .. code-block:: python

        @router.get("/projects/{project_id}/columns")
        async def get_columns(
            project_id: str,
            session: Annotated[AsyncSession, Depends(get_board_session)],
        ):
            return {"columns": await ColumnStore(session).get(project_id)}
    """
    async with manager.session() as session:
        yield session


async def get_board(
    session: Annotated[AsyncSession, Depends(get_board_session)],
    manager: Annotated[BoardManager, Depends(get_board_manager)],
) -> ProjectFacade:
    """Return a :class:`~taskboard.facade.ProjectFacade` over the request session."""
    return ProjectFacade.from_config(session, manager.config)


Board = Annotated[ProjectFacade, Depends(get_board)]


__all__ = ["Board", "get_board", "get_board_manager", "get_board_session"]
