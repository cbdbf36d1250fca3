"""Application layer: DTOs, repository interfaces, assignment use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task, user, team, history repos).
"""

from app.application.interfaces import (
    IAssignmentHistoryRepository,
    ITaskRepository,
    ITeamRepository,
    IUserRepository,
)
from app.application.use_cases.assignments import (
    TaskAssignmentService,
    build_assignment_options,
)

__all__ = [
    "IAssignmentHistoryRepository",
    "ITaskRepository",
    "ITeamRepository",
    "IUserRepository",
    "TaskAssignmentService",
    "build_assignment_options",
]
