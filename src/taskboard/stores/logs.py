"""Comment and bug logs: append-only children of a task.

Each successful write records one activity entry through
:class:`~taskboard.stores.activity.ActivityRecorder`; that entry is
best-effort and never fails the write it describes.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from taskboard.core.exceptions import InvalidArgumentError
from taskboard.core.types import BugReport, Comment
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import TaskBugModel, TaskCommentModel
from taskboard.stores.activity import ActivityRecorder
from taskboard.stores.tasks import load_task_model

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

COMMENT_ACTIVITY = "Comment added"
BUG_ACTIVITY = "Bug reported"


class CommentLog:
    def __init__(self, session: AsyncSession, recorder: ActivityRecorder | None = None) -> None:
        self.session = session
        self.recorder = recorder or ActivityRecorder(session)

    async def create(self, task_id: str, text: str | None, author_id: str | None = None) -> Comment:
        """Add a comment to *task_id*.

        Raises:
            InvalidArgumentError: If *text* is empty (nothing is written)
            TaskNotFoundError: If the task does not exist
        """
        if not text or not text.strip():
            raise InvalidArgumentError("text", "comment text is required")
        await load_task_model(self.session, task_id)

        model = TaskCommentModel(task_id=task_id, text=text, author_id=author_id or None)
        self.session.add(model)
        await commit_or_raise(self.session, "create_comment")
        await self.session.refresh(model)
        comment = model.to_domain()
        logger.info("Comment %s added to task %s", comment.id, task_id)

        await self.recorder.create(task_id, COMMENT_ACTIVITY)
        return comment

    async def get_by_task(self, task_id: str) -> list[Comment]:
        await load_task_model(self.session, task_id)
        result = await self.session.execute(
            select(TaskCommentModel)
            .where(TaskCommentModel.task_id == task_id)
            .order_by(TaskCommentModel.created_at, TaskCommentModel.id)
        )
        return [m.to_domain() for m in result.scalars().all()]


class BugLog:
    def __init__(self, session: AsyncSession, recorder: ActivityRecorder | None = None) -> None:
        self.session = session
        self.recorder = recorder or ActivityRecorder(session)

    async def create(
        self, task_id: str, description: str | None, reporter_id: str | None = None
    ) -> BugReport:
        """File a bug against *task_id*.

        Raises:
            InvalidArgumentError: If *description* is empty (nothing is written)
            TaskNotFoundError: If the task does not exist
        """
        if not description or not description.strip():
            raise InvalidArgumentError("description", "Missing description")
        await load_task_model(self.session, task_id)

        model = TaskBugModel(
            task_id=task_id, description=description, reporter_id=reporter_id or None
        )
        self.session.add(model)
        await commit_or_raise(self.session, "create_bug")
        await self.session.refresh(model)
        bug = model.to_domain()
        logger.info("Bug %s reported on task %s", bug.id, task_id)

        await self.recorder.create(task_id, BUG_ACTIVITY)
        return bug

    async def get_by_task(self, task_id: str) -> list[BugReport]:
        await load_task_model(self.session, task_id)
        result = await self.session.execute(
            select(TaskBugModel)
            .where(TaskBugModel.task_id == task_id)
            .order_by(TaskBugModel.created_at, TaskBugModel.id)
        )
        return [m.to_domain() for m in result.scalars().all()]


__all__ = ["BUG_ACTIVITY", "COMMENT_ACTIVITY", "BugLog", "CommentLog"]
