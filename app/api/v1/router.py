"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, projects, task_assignments

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    task_assignments.router, prefix="/tasks", tags=["task-assignments"]
)
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
