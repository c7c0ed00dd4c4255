"""Request middleware: timing, access logging, and error-to-JSON mapping.

Every :class:`~taskboard.core.exceptions.BoardError` that escapes a route
becomes a JSON body ``{"error": <code>, "message": <text>}``:

=========================  ======  ====================
Exception                  Status  ``error``
=========================  ======  ====================
``InvalidArgumentError``   400     ``invalid_argument``
``NotFoundError``          404     ``not_found``
``PersistenceError``       500     ``internal_error``
anything else              500     ``internal_error``
=========================  ======  ====================

``details`` is added only when ``debug_errors`` is enabled.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskboard.core.exceptions import (
    BoardError,
    InvalidArgumentError,
    NotFoundError,
)

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)


class RequestMiddleware(BaseHTTPMiddleware):
    """Time and log each request, and turn board errors into responses.

    Parameters
    ----------
    app:
        The ASGI application (injected by Starlette's middleware machinery).
    skip_log_paths:
        Path prefixes whose successful requests are logged at DEBUG only.
    debug_errors:
        When ``True`` error responses include the exception's ``details``.
    """

    def __init__(
        self,
        app: Any,
        *,
        skip_log_paths: list[str] | None = None,
        debug_errors: bool = False,
    ) -> None:
        super().__init__(app)
        self.skip_log_paths: list[str] = list(skip_log_paths or [])
        self.debug_errors = debug_errors

    def _is_quiet_path(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.skip_log_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)

        except InvalidArgumentError as exc:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
            response = self._error_response(
                status.HTTP_400_BAD_REQUEST,
                "invalid_argument",
                exc.message,
                self._details(exc),
            )

        except NotFoundError as exc:
            logger.info("Not found %s %s: %s", request.method, request.url.path, exc.message)
            response = self._error_response(
                status.HTTP_404_NOT_FOUND,
                "not_found",
                exc.message,
                self._details(exc),
            )

        except BoardError as exc:
            logger.error("Board error: %s", exc.message, exc_info=True)
            response = self._error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "internal_error",
                "An error occurred while processing the request",
                self._details(exc),
            )

        except Exception as exc:
            logger.error("Unexpected error: %s", exc, exc_info=True)
            response = self._error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "internal_error",
                "An unexpected error occurred",
                {},
            )

        elapsed_ms = (time.perf_counter() - start) * 1000
        log = logger.debug if self._is_quiet_path(request.url.path) else logger.info
        log(
            "%s %s [%d] %.2f ms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    def _details(self, exc: BoardError) -> dict[str, Any]:
        return exc.details if self.debug_errors else {}

    @staticmethod
    def _error_response(
        status_code: int,
        error: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> JSONResponse:
        content: dict[str, Any] = {"error": error, "message": message}
        if details:
            content["details"] = details
        return JSONResponse(status_code=status_code, content=content)


__all__ = ["RequestMiddleware"]
