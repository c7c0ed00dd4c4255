"""Task routes, including comments, bugs and activity."""
from __future__ import annotations

from fastapi import APIRouter, status

from taskboard.core.schemas import BugCreate, CommentCreate, TaskCreate, TaskUpdate
from taskboard.core.types import ActivityEntry, BugReport, Comment, Task
from taskboard.dependencies import Board

router = APIRouter()


# ── Tasks ─────────────────────────────────────────────────────────────────────

@router.get("/projects/{project_id}/tasks", response_model=list[Task])
async def list_tasks(project_id: str, board: Board):
    """List the project's tasks, newest first, decorated with assignees."""
    return await board.list_tasks(project_id)


@router.post(
    "/projects/{project_id}/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(project_id: str, body: TaskCreate, board: Board):
    return await board.create_task_with_assignees(project_id, body)


@router.get("/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, board: Board):
    return await board.get_task(task_id)


@router.put("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, body: TaskUpdate, board: Board):
    return await board.update_task_recording_activity(task_id, body)


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, board: Board):
    await board.delete_task(task_id)
    return {"success": True}


# ── Comments, bugs, activity ──────────────────────────────────────────────────

@router.get("/tasks/{task_id}/comments", response_model=list[Comment])
async def list_comments(task_id: str, board: Board):
    return await board.comments.get_by_task(task_id)


@router.post(
    "/tasks/{task_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(task_id: str, body: CommentCreate, board: Board):
    return await board.comments.create(task_id, body.text, body.author_id)


@router.get("/tasks/{task_id}/bugs", response_model=list[BugReport])
async def list_bugs(task_id: str, board: Board):
    return await board.bugs.get_by_task(task_id)


@router.post(
    "/tasks/{task_id}/bugs",
    response_model=BugReport,
    status_code=status.HTTP_201_CREATED,
)
async def report_bug(task_id: str, body: BugCreate, board: Board):
    return await board.bugs.create(task_id, body.description, body.reporter_id)


@router.get("/tasks/{task_id}/activities", response_model=list[ActivityEntry])
async def list_activities(task_id: str, board: Board):
    return await board.activity.get_by_task(task_id)
