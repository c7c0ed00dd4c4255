"""Project façade: the operations the HTTP layer calls.

The façade composes the stores over one session and adds the behaviour
that spans them: tasks decorated with their assignees, and activity
entries recorded after task updates.

Decoration
----------
A decorated task carries ``assignees`` (linked person ids, in link order)
and ``assignee`` (their names joined with ``", "``).
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from taskboard.core.schemas import changed_fields
from taskboard.core.types import DEFAULT_COLUMNS, Project, ProjectMember, Task
from taskboard.stores import (
    ActivityRecorder,
    AssigneeLinker,
    BugLog,
    ColumnStore,
    CommentLog,
    PeopleStore,
    ProjectStore,
    TaskStore,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskboard.core.config import BoardConfig
    from taskboard.core.schemas import ProjectCreate, ProjectUpdate, TaskCreate, TaskUpdate
    from taskboard.core.types import Assignee

logger = logging.getLogger(__name__)

# Task fields that produce an activity entry when updated, in recording order.
_TRACKED_FIELDS: tuple[tuple[str, str], ...] = (
    ("assignee_id", "Assigned to {value}"),
    ("description", "Updated description"),
    ("title", "Updated title"),
)


def decorate(task: Task, assignees: Sequence[Assignee]) -> Task:
    """Return *task* with ``assignees``/``assignee`` derived from *assignees*."""
    return task.model_copy(
        update={
            "assignees": [a.id for a in assignees],
            "assignee": ", ".join(a.name for a in assignees),
        }
    )


class ProjectFacade:
    """Board operations over a single session.

    Example:
        ```python
        async with manager.session() as session:
            board = ProjectFacade.from_config(session, manager.config)
            task = await board.create_task_with_assignees(
                project_id, TaskCreate(title="Ship it", assignee_ids=["u1", "u2"])
            )
            task.assignee  # 'Alice, Bob'
        ```
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        default_columns: Sequence[str] = DEFAULT_COLUMNS,
        strict_reorder: bool = False,
    ) -> None:
        self.session = session
        self.projects = ProjectStore(session, default_columns=default_columns)
        self.columns = ColumnStore(
            session, default_columns=default_columns, strict_reorder=strict_reorder
        )
        self.tasks = TaskStore(session)
        self.assignees = AssigneeLinker(session)
        self.activity = ActivityRecorder(session)
        self.comments = CommentLog(session, self.activity)
        self.bugs = BugLog(session, self.activity)
        self.people = PeopleStore(session)

    @classmethod
    def from_config(cls, session: AsyncSession, config: BoardConfig) -> ProjectFacade:
        return cls(
            session,
            default_columns=config.default_columns,
            strict_reorder=config.column_reorder_strict,
        )

    # Projects

    async def list_projects(self) -> list[Project]:
        return await self.projects.list()

    async def create_project(self, payload: ProjectCreate) -> Project:
        return await self.projects.create(payload)

    async def get_project(self, project_id: str) -> Project:
        return await self.projects.get_by_id(project_id)

    async def update_project(self, project_id: str, payload: ProjectUpdate) -> Project:
        """Apply the changed fields of *payload*.

        ``columns`` is validated and written with the column reorder rules
        before any other field is touched.
        """
        if "columns" in payload.model_fields_set and payload.columns is not None:
            await self.columns.reorder(project_id, payload.columns)
        return await self.projects.update(
            project_id, changed_fields(payload, exclude={"columns"})
        )

    async def delete_project(self, project_id: str) -> None:
        await self.projects.delete(project_id)

    async def members(self, project_id: str) -> list[ProjectMember]:
        return await self.projects.members(project_id)

    # Tasks

    async def list_tasks(self, project_id: str) -> list[Task]:
        """Decorated tasks of the project, newest first.

        A task whose assignee lookup fails is returned undecorated rather
        than failing the whole listing.
        """
        tasks = await self.tasks.list_by_project(project_id)
        decorated: list[Task] = []
        for task in tasks:
            try:
                assignees = await self.assignees.get_by_task(task.id)
            except Exception:
                logger.warning("Assignee lookup failed for task %s", task.id, exc_info=True)
                await self.session.rollback()
                decorated.append(task)
                continue
            decorated.append(decorate(task, assignees))
        return decorated

    async def get_task(self, task_id: str) -> Task:
        task = await self.tasks.get_by_id(task_id)
        return decorate(task, await self.assignees.get_by_task(task_id))

    async def create_task_with_assignees(self, project_id: str, payload: TaskCreate) -> Task:
        task = await self.tasks.create(project_id, payload)
        if payload.sends_assignees():
            await self.assignees.set_for_task(task.id, payload.assignee_ids or [])
        return await self.get_task(task.id)

    async def update_task_recording_activity(self, task_id: str, payload: TaskUpdate) -> Task:
        """Update the task, replace its assignees if sent, then log activity.

        Activity entries are written after the update commits, one per
        tracked field that carried a value; each is best-effort.
        """
        changes = changed_fields(payload, exclude={"assignee_ids"})
        await self.tasks.update(task_id, changes)
        if payload.sends_assignees():
            await self.assignees.set_for_task(task_id, payload.assignee_ids or [])
        task = await self.get_task(task_id)

        for field, template in _TRACKED_FIELDS:
            if field in changes:
                await self.activity.create(task_id, template.format(value=changes[field]))
        return task

    async def delete_task(self, task_id: str) -> None:
        await self.tasks.delete(task_id)


__all__ = ["ProjectFacade", "decorate"]
