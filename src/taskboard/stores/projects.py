"""Project store: project rows, their team members, and template seeding."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from taskboard.core.exceptions import InvalidArgumentError, ProjectNotFoundError
from taskboard.core.types import DEFAULT_COLUMNS, Project, ProjectMember
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import ProjectMemberModel, ProjectModel, TaskModel
from taskboard.utils.validation import (
    dedupe_preserving_order,
    encode_columns,
    find_column_problem,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskboard.core.schemas import ProjectCreate

logger = logging.getLogger(__name__)

# Fields a partial update may write straight onto the row.
_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "manager", "members_count", "sprint_length"}
)


async def load_project_model(session: AsyncSession, project_id: str) -> ProjectModel:
    """Fetch the ORM row for *project_id* or raise :class:`ProjectNotFoundError`."""
    if not project_id:
        raise InvalidArgumentError("project_id", "project id is required")
    result = await session.execute(select(ProjectModel).where(ProjectModel.id == project_id))
    model = result.scalar_one_or_none()
    if model is None:
        raise ProjectNotFoundError(identifier=project_id)
    return model


class ProjectStore:
    """CRUD for projects.

    Example:
        ```python
        store = ProjectStore(session)
        project = await store.create(ProjectCreate(name="Relaunch"))
        project.columns  # ['Todo', 'Sprint', 'Review', 'Completed']
        ```
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        default_columns: Sequence[str] = DEFAULT_COLUMNS,
    ) -> None:
        self.session = session
        self.default_columns = tuple(default_columns)

    async def list(self, skip: int = 0, limit: int = 100) -> list[Project]:
        query = (
            select(ProjectModel)
            .order_by(ProjectModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [m.to_domain(self.default_columns) for m in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(ProjectModel.id)))
        return result.scalar() or 0

    async def get_by_id(self, project_id: str) -> Project:
        model = await load_project_model(self.session, project_id)
        return model.to_domain(self.default_columns)

    async def create(self, payload: ProjectCreate) -> Project:
        """Create a project, its members, and any template tasks.

        An empty ``columns`` list means the defaults. When ``template_phases``
        is given and ``columns`` is not, the phase names become the columns
        and each phase task becomes a task whose status is the phase name.

        Raises:
            InvalidArgumentError: Missing name or invalid columns
        """
        if not payload.name or not payload.name.strip():
            raise InvalidArgumentError("name", "project name is required")

        phases = payload.template_phases or []
        if payload.columns:
            columns = list(payload.columns)
        elif phases:
            columns = dedupe_preserving_order([p.name for p in phases])
        else:
            columns = list(self.default_columns)
        problem = find_column_problem(columns)
        if problem:
            raise InvalidArgumentError("columns", problem)

        members_count = payload.members_count
        if members_count is None:
            members_count = len(payload.members)

        model = ProjectModel(
            name=payload.name,
            description=payload.description or "",
            manager=payload.manager,
            members_count=members_count,
            sprint_length=payload.sprint_length,
            template_id=payload.template_id,
            columns_json=encode_columns(columns),
        )
        self.session.add(model)
        await self.session.flush()

        for member in payload.members:
            self.session.add(
                ProjectMemberModel(
                    project_id=model.id,
                    name=member.name,
                    role=member.role,
                    user_id=member.user_id,
                )
            )
        seeded = 0
        for phase in phases:
            for title in phase.tasks:
                if not title:
                    continue
                self.session.add(TaskModel(project_id=model.id, title=title, status=phase.name))
                seeded += 1

        await commit_or_raise(self.session, "create_project")
        await self.session.refresh(model)
        logger.info(
            "Created project id=%s members=%d template=%s seeded_tasks=%d",
            model.id, len(payload.members), payload.template_id, seeded,
        )
        return model.to_domain(self.default_columns)

    async def update(self, project_id: str, changes: dict[str, Any]) -> Project:
        """Write *changes* (already filtered to changed fields) onto the row."""
        model = await load_project_model(self.session, project_id)
        applied = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        if applied:
            for key, value in applied.items():
                setattr(model, key, value)
            await commit_or_raise(self.session, "update_project")
            await self.session.refresh(model)
            logger.info("Updated project id=%s fields=%s", project_id, sorted(applied))
        return model.to_domain(self.default_columns)

    async def delete(self, project_id: str) -> None:
        """Delete the project; tasks and members go with it (FK cascade)."""
        model = await load_project_model(self.session, project_id)
        await self.session.delete(model)
        await commit_or_raise(self.session, "delete_project")
        logger.info("Deleted project id=%s", project_id)

    async def members(self, project_id: str) -> list[ProjectMember]:
        await load_project_model(self.session, project_id)
        result = await self.session.execute(
            select(ProjectMemberModel)
            .where(ProjectMemberModel.project_id == project_id)
            .order_by(ProjectMemberModel.id)
        )
        return [m.to_domain() for m in result.scalars().all()]


__all__ = ["ProjectStore", "load_project_model"]
