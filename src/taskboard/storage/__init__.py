"""Persistence layer: ORM models and the async database handle.

Example:
    ```python
    from taskboard.storage import Database

    db = Database("postgresql+asyncpg://localhost/board")
    await db.initialize()

    async with db.session() as session:
        ...
    ```
"""

from taskboard.storage.database import Database, commit_or_raise
from taskboard.storage.models import (
    Base,
    PersonModel,
    ProjectMemberModel,
    ProjectModel,
    TaskActivityModel,
    TaskAssigneeModel,
    TaskBugModel,
    TaskCommentModel,
    TaskModel,
)

__all__ = [
    "Base",
    "Database",
    "PersonModel",
    "ProjectMemberModel",
    "ProjectModel",
    "TaskActivityModel",
    "TaskAssigneeModel",
    "TaskBugModel",
    "TaskCommentModel",
    "TaskModel",
    "commit_or_raise",
]
