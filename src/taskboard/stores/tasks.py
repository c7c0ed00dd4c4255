"""Task store: plain task rows, without assignee decoration."""
from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from taskboard.core.exceptions import InvalidArgumentError, TaskNotFoundError
from taskboard.core.types import DEFAULT_TASK_STATUS, Task, TaskPriority
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import TaskModel
from taskboard.stores.projects import load_project_model

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskboard.core.schemas import TaskCreate

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    {"title", "status", "priority", "estimate", "due_date", "description", "labels", "assignee_id"}
)


async def load_task_model(session: AsyncSession, task_id: str) -> TaskModel:
    """Fetch the ORM row for *task_id* or raise :class:`TaskNotFoundError`."""
    if not task_id:
        raise InvalidArgumentError("task_id", "task id is required")
    result = await session.execute(select(TaskModel).where(TaskModel.id == task_id))
    model = result.scalar_one_or_none()
    if model is None:
        raise TaskNotFoundError(identifier=task_id)
    return model


def _encode_labels(labels: list[str] | None) -> str:
    return json.dumps(list(labels or []), ensure_ascii=False)


class TaskStore:
    """Persistence for tasks.

    Assignee links live in :class:`~taskboard.stores.assignees.AssigneeLinker`;
    tasks returned here carry empty ``assignees``/``assignee`` until decorated.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_by_project(self, project_id: str) -> list[Task]:
        """Tasks of *project_id*, newest first.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        await load_project_model(self.session, project_id)
        result = await self.session.execute(
            select(TaskModel)
            .where(TaskModel.project_id == project_id)
            .order_by(TaskModel.created_at.desc(), TaskModel.id)
        )
        return [m.to_domain() for m in result.scalars().all()]

    async def get_by_id(self, task_id: str) -> Task:
        model = await load_task_model(self.session, task_id)
        return model.to_domain()

    async def create(self, project_id: str, payload: TaskCreate) -> Task:
        """Insert a task; missing status/priority/labels take their defaults.

        Raises:
            InvalidArgumentError: If the title is missing
            ProjectNotFoundError: If the project does not exist
        """
        if not payload.title or not payload.title.strip():
            raise InvalidArgumentError("title", "task title is required")
        await load_project_model(self.session, project_id)

        model = TaskModel(
            project_id=project_id,
            title=payload.title,
            status=payload.status or DEFAULT_TASK_STATUS,
            priority=payload.priority or TaskPriority.LOW.value,
            estimate=payload.estimate,
            due_date=payload.due_date,
            description=payload.description,
            labels_json=_encode_labels(payload.labels),
            assignee_id=payload.assignee_id or None,
        )
        self.session.add(model)
        await commit_or_raise(self.session, "create_task")
        await self.session.refresh(model)
        logger.info("Created task id=%s project=%s", model.id, project_id)
        return model.to_domain()

    async def update(self, task_id: str, changes: dict[str, Any]) -> Task:
        """Apply *changes* (already filtered to changed fields) to the task."""
        model = await load_task_model(self.session, task_id)
        applied = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        if not applied:
            return model.to_domain()

        for key, value in applied.items():
            if key == "labels":
                model.labels_json = _encode_labels(value)
            else:
                setattr(model, key, value)
        await commit_or_raise(self.session, "update_task")
        await self.session.refresh(model)
        logger.info("Updated task id=%s fields=%s", task_id, sorted(applied))
        return model.to_domain()

    async def delete(self, task_id: str) -> None:
        """Delete the task; links, activity, comments and bugs cascade."""
        model = await load_task_model(self.session, task_id)
        await self.session.delete(model)
        await commit_or_raise(self.session, "delete_task")
        logger.info("Deleted task id=%s", task_id)


__all__ = ["TaskStore", "load_task_model"]
