"""Application factory."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.api import people_router, projects_router, tasks_router
from taskboard.core.config import BoardConfig
from taskboard.dependencies import get_board_manager
from taskboard.manager import BoardManager
from taskboard.middleware.requests import RequestMiddleware

logger = logging.getLogger(__name__)


def _validation_message(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def create_app(
    config: BoardConfig | None = None,
    *,
    manager: BoardManager | None = None,
) -> FastAPI:
    """Build the board API.

    Middleware and routers are registered here, before the app starts; the
    lifespan only initialises and shuts down the :class:`BoardManager`.

    Parameters
    ----------
    config:
        Settings; read from the environment when omitted.
    manager:
        A pre-built (possibly already initialised) manager.  Its config wins
        over *config*.
    """
    if manager is None:
        manager = BoardManager(config or BoardConfig())
    config = manager.config

    app = FastAPI(
        title="Taskboard",
        description="Kanban project and task tracking API",
        lifespan=BoardManager.create_lifespan(manager),
    )
    app.state.board_manager = manager

    app.add_middleware(
        RequestMiddleware,
        skip_log_paths=config.skip_log_paths,
        debug_errors=config.debug_errors,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.info("Invalid request body %s %s: %s", request.method, request.url.path, errors)
        content: dict[str, Any] = {
            "error": "invalid_argument",
            "message": _validation_message(errors),
        }
        if config.debug_errors:
            content["details"] = {"errors": errors}
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    app.include_router(projects_router, tags=["projects"])
    app.include_router(tasks_router, tags=["tasks"])
    app.include_router(people_router, tags=["people"])

    @app.get("/health", tags=["ops"])
    async def health(request: Request):
        return await get_board_manager(request).health_check()

    return app


__all__ = ["create_app"]
