"""Append-only activity log per task."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from taskboard.core.exceptions import InvalidArgumentError
from taskboard.core.types import ActivityEntry
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import TaskActivityModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class ActivityRecorder:
    """Writes and reads activity entries.

    :meth:`create` is the side-effect entry point: a failure never reaches the
    caller. Use :meth:`append` when the write itself is the operation.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, task_id: str, message: str) -> ActivityEntry:
        """Append one entry.

        Raises:
            InvalidArgumentError: If *message* is empty
            PersistenceError: If the entry could not be committed
        """
        if not message:
            raise InvalidArgumentError("message", "activity message is required")
        model = TaskActivityModel(task_id=task_id, message=message)
        self.session.add(model)
        await commit_or_raise(self.session, "record_activity")
        await self.session.refresh(model)
        logger.debug("Activity task=%s message=%r", task_id, message)
        return model.to_domain()

    async def create(self, task_id: str, message: str) -> ActivityEntry | None:
        """Best-effort :meth:`append`; returns ``None`` and logs on failure."""
        try:
            return await self.append(task_id, message)
        except Exception:
            logger.exception("Failed to record activity %r for task %s", message, task_id)
            await self.session.rollback()
            return None

    async def get_by_task(self, task_id: str) -> list[ActivityEntry]:
        """Entries for *task_id*, oldest first."""
        result = await self.session.execute(
            select(TaskActivityModel)
            .where(TaskActivityModel.task_id == task_id)
            .order_by(TaskActivityModel.created_at, TaskActivityModel.id)
        )
        return [m.to_domain() for m in result.scalars().all()]


__all__ = ["ActivityRecorder"]
