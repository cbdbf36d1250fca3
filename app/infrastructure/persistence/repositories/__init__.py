"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.assignment_history_repo import (
    AssignmentHistoryRepository,
)
from app.infrastructure.persistence.repositories.base import BaseRepository, gateway_errors
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.team_repo import TeamRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AssignmentHistoryRepository",
    "BaseRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
    "gateway_errors",
]
