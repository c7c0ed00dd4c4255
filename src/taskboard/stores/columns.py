"""Column store: the ordered workflow stages of a project.

A column's position is its index in the project's list, so positions stay
contiguous (``0..n-1``) after every add, remove and reorder.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from taskboard.core.exceptions import InvalidArgumentError
from taskboard.core.types import DEFAULT_COLUMNS, Project
from taskboard.storage.database import commit_or_raise
from taskboard.stores.projects import load_project_model
from taskboard.utils.validation import (
    encode_columns,
    find_column_problem,
    is_permutation,
    normalize_columns,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskboard.storage.models import ProjectModel

logger = logging.getLogger(__name__)


class ColumnStore:
    """Read and mutate a project's column list.

    Parameters
    ----------
    session:
        Open session; every mutation commits before returning.
    default_columns:
        Columns reported for projects that never stored any.
    strict_reorder:
        When ``True``, :meth:`reorder` only accepts permutations of the
        current columns.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        default_columns: Sequence[str] = DEFAULT_COLUMNS,
        strict_reorder: bool = False,
    ) -> None:
        self.session = session
        self.default_columns = tuple(default_columns)
        self.strict_reorder = strict_reorder

    async def get(self, project_id: str) -> list[str]:
        """Return the project's columns, normalised to a list.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        model = await load_project_model(self.session, project_id)
        return normalize_columns(model.columns_json, self.default_columns)

    async def add(self, project_id: str, name: str, position: int | None = None) -> Project:
        """Insert *name* at *position* (append when omitted or past the end).

        Raises:
            InvalidArgumentError: Empty or overlong name, negative position, or
                duplicate name
            ProjectNotFoundError: If the project does not exist
        """
        if not name or not name.strip():
            raise InvalidArgumentError("columnName", "column name is required")
        problem = find_column_problem([name])
        if problem:
            raise InvalidArgumentError("columnName", problem)
        if position is not None and position < 0:
            raise InvalidArgumentError("position", "must be zero or greater")

        model = await load_project_model(self.session, project_id)
        columns = normalize_columns(model.columns_json, self.default_columns)
        if name in columns:
            raise InvalidArgumentError(
                "columnName", f"column {name!r} already exists", {"columns": columns}
            )

        if position is None or position >= len(columns):
            columns.append(name)
        else:
            columns.insert(position, name)
        return await self._save(model, columns, "add_column")

    async def remove(self, project_id: str, name: str) -> Project:
        """Remove the first column named *name*; absent names are a no-op.

        Raises:
            InvalidArgumentError: If *name* is empty or is the only column
            ProjectNotFoundError: If the project does not exist
        """
        if not name:
            raise InvalidArgumentError("columnName", "column name is required")

        model = await load_project_model(self.session, project_id)
        columns = normalize_columns(model.columns_json, self.default_columns)
        if name not in columns:
            logger.debug("Column %r not on project %s, nothing to remove", name, project_id)
            return model.to_domain(self.default_columns)

        if len(columns) == 1:
            # an empty list reads back as the defaults
            raise InvalidArgumentError("columnName", "cannot remove the last column")
        columns.remove(name)
        return await self._save(model, columns, "remove_column")

    async def reorder(self, project_id: str, new_order: Sequence[str]) -> Project:
        """Replace the column list wholesale with *new_order*.

        Raises:
            InvalidArgumentError: Empty list, blank or duplicate names, or (strict mode)
                a list that is not a permutation of the current columns
            ProjectNotFoundError: If the project does not exist
        """
        if not new_order:
            raise InvalidArgumentError("columns", "at least one column is required")
        problem = find_column_problem(new_order)
        if problem:
            raise InvalidArgumentError("columns", problem)

        model = await load_project_model(self.session, project_id)
        if self.strict_reorder:
            current = normalize_columns(model.columns_json, self.default_columns)
            if not is_permutation(new_order, current):
                raise InvalidArgumentError(
                    "columns",
                    "must contain exactly the existing columns",
                    {"current": current},
                )
        return await self._save(model, list(new_order), "reorder_columns")

    async def _save(self, model: ProjectModel, columns: list[str], operation: str) -> Project:
        model.columns_json = encode_columns(columns)
        await commit_or_raise(self.session, operation)
        await self.session.refresh(model)
        logger.info("%s project=%s columns=%s", operation, model.id, columns)
        return model.to_domain(self.default_columns)


__all__ = ["ColumnStore"]
