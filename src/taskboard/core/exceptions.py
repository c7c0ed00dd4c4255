"""Custom exceptions for taskboard.

All exceptions derive from :class:`BoardError` so callers can catch the
entire family with a single ``except BoardError`` clause.

Hierarchy::

    BoardError
    ├── InvalidArgumentError      → HTTP 400
    ├── NotFoundError             → HTTP 404
    │   ├── ProjectNotFoundError
    │   └── TaskNotFoundError
    └── PersistenceError          → HTTP 500
"""

from __future__ import annotations

from typing import Any


class BoardError(Exception):
    """Base exception for all taskboard errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r})"


class InvalidArgumentError(BoardError):
    """Raised when a required identifier or body field is missing or malformed.

    Always raised before any mutation is attempted.
    """

    def __init__(
        self,
        parameter: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid argument {parameter!r}: {reason}", details)
        self.parameter = parameter
        self.reason = reason


class NotFoundError(BoardError):
    """Raised when a referenced row does not exist."""

    resource = "resource"

    def __init__(
        self,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        label = self.resource.capitalize()
        message = f"{label} not found: {identifier!r}" if identifier else f"{label} not found"
        super().__init__(message, details)
        self.identifier = identifier


class ProjectNotFoundError(NotFoundError):
    """Raised when a project id does not resolve to a row."""

    resource = "project"


class TaskNotFoundError(NotFoundError):
    """Raised when a task id does not resolve to a row."""

    resource = "task"


class PersistenceError(BoardError):
    """Raised when the database rejects or fails an operation.

    The original exception is chained; only a generic message reaches clients.
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Persistence operation {operation!r} failed: {reason}", details)
        self.operation = operation
        self.reason = reason


__all__ = [
    "BoardError",
    "InvalidArgumentError",
    "NotFoundError",
    "PersistenceError",
    "ProjectNotFoundError",
    "TaskNotFoundError",
]
