"""Session-scoped stores, one per board concern.

Every store takes an open :class:`~sqlalchemy.ext.asyncio.AsyncSession`
and commits its own writes.
"""

from taskboard.stores.activity import ActivityRecorder
from taskboard.stores.assignees import AssigneeLinker
from taskboard.stores.columns import ColumnStore
from taskboard.stores.logs import BugLog, CommentLog
from taskboard.stores.people import PeopleStore
from taskboard.stores.projects import ProjectStore, load_project_model
from taskboard.stores.tasks import TaskStore, load_task_model

__all__ = [
    "ActivityRecorder",
    "AssigneeLinker",
    "BugLog",
    "ColumnStore",
    "CommentLog",
    "PeopleStore",
    "ProjectStore",
    "TaskStore",
    "load_project_model",
    "load_task_model",
]
