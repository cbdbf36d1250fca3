"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, request scoping (organization,
acting user) and the assignment service. Routes depend only on these
dependencies, not on infrastructure directly.

Read endpoints use get_db; assign/unassign use get_db_transactional so the
task write and the history append commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.application.use_cases.assignments import TaskAssignmentService
from app.core.config import get_settings
from app.core.organization_validation import is_valid_organization_id_format
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AssignmentHistoryRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from app.shared.context import set_request_actor


def _build_assignment_service(db: AsyncSession) -> TaskAssignmentService:
    return TaskAssignmentService(
        task_repo=TaskRepository(db),
        history_repo=AssignmentHistoryRepository(db),
        user_repo=UserRepository(db),
        team_repo=TeamRepository(db),
        history_page_size=get_settings().history_page_size,
    )


async def get_assignment_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskAssignmentService:
    """Assignment service for read-only operations (current, preview, history)."""
    return _build_assignment_service(db)


async def get_assignment_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskAssignmentService:
    """Assignment service for assign/unassign (one transaction per request)."""
    return _build_assignment_service(db)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


def get_organization_id(request: Request) -> str:
    """Resolve organization ID from header; reject missing or malformed values."""
    name = get_settings().organization_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required header: {name}")
    if not is_valid_organization_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid organization ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    return value


async def get_acting_user(
    request: Request,
    organization_id: Annotated[str, Depends(get_organization_id)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult:
    """Resolve the acting user from header; must be an active user of the organization."""
    name = get_settings().actor_header_name
    user_id = request.headers.get(name)
    if not user_id:
        raise AuthenticationException(f"Missing required header: {name}")
    user = await user_repo.get_by_id_and_organization(user_id, organization_id)
    if user is None or not user.is_active:
        raise AuthenticationException("Unknown or inactive acting user")
    set_request_actor(organization_id, user.id)
    return user
