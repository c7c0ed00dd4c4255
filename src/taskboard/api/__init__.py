"""HTTP routers for the board API."""

from taskboard.api.people import router as people_router
from taskboard.api.projects import router as projects_router
from taskboard.api.tasks import router as tasks_router

__all__ = ["people_router", "projects_router", "tasks_router"]
