"""Application interfaces (ports): repository protocols."""

from app.application.interfaces.repositories import (
    IAssignmentHistoryRepository,
    ITaskRepository,
    ITeamRepository,
    IUserRepository,
)

__all__ = [
    "IAssignmentHistoryRepository",
    "ITaskRepository",
    "ITeamRepository",
    "IUserRepository",
]
