"""Core domain models for taskboard.

Every model returned by a store is frozen; use ``model_copy(update={...})``
to derive a modified version (this is how task decoration works).
"""
from __future__ import annotations

from datetime import UTC, date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COLUMNS: tuple[str, ...] = ("Todo", "Sprint", "Review", "Completed")
DEFAULT_TASK_STATUS = "Todo"


class TaskPriority(StrEnum):
    """Well-known priority values. The column itself stores free text."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _now() -> datetime:
    return datetime.now(UTC)


class Project(BaseModel):
    """A kanban board: metadata plus its ordered workflow columns.

    Example
    -------
    .. code-block:: python

        project = Project(id="p-1", name="Website relaunch")
        project.columns  # ['Todo', 'Sprint', 'Review', 'Completed']
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "3f1c…",
                    "name": "Website relaunch",
                    "manager": "Dana",
                    "members_count": 4,
                    "sprint_length": 14,
                    "columns": ["Todo", "Sprint", "Review", "Completed"],
                }
            ]
        },
    )

    id: str = Field(..., min_length=1, description="Project id")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Free-form description")
    manager: str | None = Field(default=None, description="Manager display name")
    members_count: int = Field(default=0, ge=0, description="Team size")
    sprint_length: int | None = Field(default=None, ge=0, description="Sprint length in days")
    template_id: str | None = Field(default=None, description="Template the project came from")
    columns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COLUMNS),
        description="Ordered workflow stage names",
    )
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class Task(BaseModel):
    """A card on the board.

    ``assignees`` and ``assignee`` are derived from the assignee links and are
    only meaningful on a task that went through decoration.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    project_id: str
    title: str
    status: str = DEFAULT_TASK_STATUS
    priority: str = TaskPriority.LOW.value
    estimate: float | None = None
    due_date: date | None = None
    description: str | None = None
    labels: list[str] = Field(default_factory=list)
    assignee_id: str | None = None
    assignees: list[str] = Field(default_factory=list, description="Linked person ids")
    assignee: str = Field(default="", description="Linked person names, comma-joined")
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class Assignee(BaseModel):
    """A person linked to a task."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ActivityEntry(BaseModel):
    """One human-readable change log line for a task."""

    model_config = ConfigDict(frozen=True)

    id: int
    task_id: str
    message: str
    created_at: datetime = Field(default_factory=_now)


class Comment(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    task_id: str
    text: str
    author_id: str | None = None
    created_at: datetime = Field(default_factory=_now)


class BugReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    task_id: str
    description: str
    reporter_id: str | None = None
    created_at: datetime = Field(default_factory=_now)


class Person(BaseModel):
    """Someone who can be assigned to tasks."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str | None = None


class ProjectMember(BaseModel):
    """A team member entry recorded when the project was created."""

    model_config = ConfigDict(frozen=True)

    id: int
    project_id: str
    name: str
    role: str = "Member"
    user_id: str | None = None


__all__ = [
    "DEFAULT_COLUMNS",
    "DEFAULT_TASK_STATUS",
    "ActivityEntry",
    "Assignee",
    "BugReport",
    "Comment",
    "Person",
    "Project",
    "ProjectMember",
    "Task",
    "TaskPriority",
]
