"""Task ↔ person links."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from taskboard.core.types import Assignee
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import PersonModel, TaskAssigneeModel
from taskboard.stores.tasks import load_task_model
from taskboard.utils.validation import dedupe_preserving_order

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class AssigneeLinker:
    """Reads and replaces the set of people assigned to a task.

    Link order is kept: :meth:`get_by_task` returns people in the order the
    last :meth:`set_for_task` call listed them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_task(self, task_id: str) -> list[Assignee]:
        """Return the linked people; ids with no person row use the id as name."""
        result = await self.session.execute(
            select(TaskAssigneeModel.user_id, PersonModel.name)
            .outerjoin(PersonModel, PersonModel.id == TaskAssigneeModel.user_id)
            .where(TaskAssigneeModel.task_id == task_id)
            .order_by(TaskAssigneeModel.position, TaskAssigneeModel.id)
        )
        return [Assignee(id=user_id, name=name or user_id) for user_id, name in result.all()]

    async def set_for_task(self, task_id: str, user_ids: Sequence[str]) -> list[Assignee]:
        """Replace the task's links with *user_ids* in a single transaction.

        Blank ids are dropped and repeats keep their first position. An empty
        sequence clears every link.

        Raises:
            TaskNotFoundError: If the task does not exist
            PersistenceError: If the replacement could not be committed; the
                previous links are left intact
        """
        await load_task_model(self.session, task_id)
        ids = dedupe_preserving_order([u for u in user_ids if u])

        await self.session.execute(
            delete(TaskAssigneeModel).where(TaskAssigneeModel.task_id == task_id)
        )
        for position, user_id in enumerate(ids):
            self.session.add(
                TaskAssigneeModel(task_id=task_id, user_id=user_id, position=position)
            )
        await commit_or_raise(self.session, "set_assignees")
        logger.info("Task %s assignees=%s", task_id, ids)
        return await self.get_by_task(task_id)


__all__ = ["AssigneeLinker"]
