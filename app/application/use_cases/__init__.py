"""Application use cases: one entry point per workflow."""

from app.application.use_cases.assignments import TaskAssignmentService

__all__ = ["TaskAssignmentService"]
