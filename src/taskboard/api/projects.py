"""Project and column routes."""
from __future__ import annotations

from fastapi import APIRouter, status

from taskboard.core.exceptions import InvalidArgumentError
from taskboard.core.schemas import (
    ColumnAdd,
    ColumnRemove,
    ColumnReorder,
    ProjectCreate,
    ProjectUpdate,
)
from taskboard.core.types import Project, ProjectMember
from taskboard.dependencies import Board

router = APIRouter()


# ── Projects ──────────────────────────────────────────────────────────────────

@router.get("/projects", response_model=list[Project])
async def list_projects(board: Board):
    return await board.list_projects()


@router.post("/projects", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(body: ProjectCreate, board: Board):
    """Create a project, optionally seeded from template phases and members."""
    return await board.create_project(body)


@router.get("/projects/{project_id}", response_model=Project)
async def get_project(project_id: str, board: Board):
    return await board.get_project(project_id)


@router.put("/projects/{project_id}", response_model=Project)
async def update_project(project_id: str, body: ProjectUpdate, board: Board):
    return await board.update_project(project_id, body)


@router.patch("/projects/{project_id}")
async def patch_project(project_id: str, body: ProjectUpdate, board: Board):
    await board.update_project(project_id, body)
    return {"success": True}


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, board: Board):
    await board.delete_project(project_id)
    return {"success": True}


@router.get("/projects/{project_id}/members", response_model=list[ProjectMember])
async def list_members(project_id: str, board: Board):
    return await board.members(project_id)


# ── Columns ───────────────────────────────────────────────────────────────────

@router.get("/projects/{project_id}/columns")
async def get_columns(project_id: str, board: Board):
    return {"columns": await board.columns.get(project_id)}


@router.post("/projects/{project_id}/columns")
async def add_column(project_id: str, body: ColumnAdd, board: Board):
    project = await board.columns.add(project_id, body.column_name or "", body.position)
    return {"columns": project.columns}


@router.delete("/projects/{project_id}/columns")
async def remove_column(project_id: str, body: ColumnRemove, board: Board):
    project = await board.columns.remove(project_id, body.column_name or "")
    return {"columns": project.columns}


@router.put("/projects/{project_id}/columns")
async def reorder_columns(project_id: str, body: ColumnReorder, board: Board):
    if body.columns is None:
        raise InvalidArgumentError("columns", "must be an array of column names")
    project = await board.columns.reorder(project_id, body.columns)
    return {"columns": project.columns}
