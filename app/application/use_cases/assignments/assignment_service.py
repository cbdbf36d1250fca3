"""Task assignment service: preview, assign, unassign, and history.

State machine over a task's assignment (Unassigned, Individuals, Team).
assign_task moves any state to the one implied by AssignmentOptions;
unassign_task moves any state to Unassigned. Each commit writes the task
and appends one history record; callers run both in one transaction.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import replace
from typing import Any

from app.application.dtos.assignment import (
    AssignmentHistoryCreate,
    AssignmentHistoryRecord,
    AssignmentOptions,
    AssignmentPreview,
    AssignmentValidation,
    CurrentAssignment,
    ProjectAssignmentConflict,
)
from app.application.dtos.task import TaskResult
from app.application.interfaces.repositories import (
    IAssignmentHistoryRepository,
    ITaskRepository,
    ITeamRepository,
    IUserRepository,
)
from app.application.use_cases.assignments.assignment_diff import (
    assignment_display_text,
    compute_changes,
    describe_assignment,
    describe_options,
    proposed_assignment,
)
from app.domain.enums import AssignmentSource, AssignmentType, HistoryAssignmentType
from app.domain.exceptions import (
    AssignmentConflictException,
    AssignmentHistoryWriteException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.assignment import (
    Assignment,
    Unassigned,
    assignment_kind,
    assignment_snapshot,
)

logger = logging.getLogger(__name__)

TEAM_REQUIRED = "A team must be selected for team assignment"
USERS_REQUIRED = "At least one user must be selected"
TEAM_AND_USERS = "Cannot assign both team and individual users simultaneously"
TEAM_NOT_FOUND = "Assigned team does not exist"
DUPLICATE_USERS = "Each user can only be selected once"
TEAM_INACTIVE = "Assigned team is not active"
USERS_NOT_FOUND = "Some assigned users may not exist or are inactive"
NAMES_MISMATCH = "User names do not line up with selected users"
BLANK_USER_ID = "Selected users must have an id"
INDIVIDUAL_TAKES_ONE = "Individual assignment takes exactly one user"
MULTIPLE_TAKES_MANY = "Multiple assignment needs more than one user"

DEFAULT_HISTORY_PAGE_SIZE = 50


def required_field_errors(options: AssignmentOptions) -> list[tuple[str, str]]:
    """Structural errors as (message, field). Non-empty means assign_task must reject."""
    if options.assignment_type == AssignmentType.TEAM:
        if not options.team_id:
            return [(TEAM_REQUIRED, "team_id")]
        return []
    if not options.user_ids:
        return [(USERS_REQUIRED, "user_ids")]
    errors: list[tuple[str, str]] = []
    if any(not uid or not uid.strip() for uid in options.user_ids):
        errors.append((BLANK_USER_ID, "user_ids"))
    count = len(options.user_ids)
    if options.assignment_type == AssignmentType.INDIVIDUAL and count > 1:
        errors.append((INDIVIDUAL_TAKES_ONE, "assignment_type"))
    elif options.assignment_type == AssignmentType.MULTIPLE and count < 2:
        errors.append((MULTIPLE_TAKES_MANY, "assignment_type"))
    return errors


def _with_stored_team_name(
    options: AssignmentOptions, validation: AssignmentValidation
) -> AssignmentOptions:
    """Fill a missing team name from the team row loaded during validation."""
    if options.assignment_type != AssignmentType.TEAM or options.team_name:
        return options
    if not validation.team_name:
        return options
    return replace(options, team_name=validation.team_name)


class TaskAssignmentService:
    """Assign and unassign tasks with preview and an append-only history (organization-scoped)."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        history_repo: IAssignmentHistoryRepository,
        user_repo: IUserRepository,
        team_repo: ITeamRepository,
        history_page_size: int = DEFAULT_HISTORY_PAGE_SIZE,
    ) -> None:
        self.task_repo = task_repo
        self.history_repo = history_repo
        self.user_repo = user_repo
        self.team_repo = team_repo
        self.history_page_size = history_page_size

    async def _load_task(self, organization_id: str, task_id: str) -> TaskResult:
        task = await self.task_repo.get_by_id_and_organization(task_id, organization_id)
        if not task:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def get_current_assignment(
        self, organization_id: str, task_id: str
    ) -> CurrentAssignment:
        """Return the task's current assignment with its source and display text."""
        task = await self._load_task(organization_id, task_id)
        source = await self._current_source(organization_id, task_id)
        return CurrentAssignment(
            task_id=task.id,
            assignment_type=assignment_kind(task.assignment),
            assignments=describe_assignment(task.assignment, source),
            display_text=assignment_display_text(task.assignment),
        )

    async def validate_assignment(
        self, options: AssignmentOptions
    ) -> AssignmentValidation:
        """Check options against structure and stored teams/users. Read-only."""
        conflicts = [msg for msg, _ in required_field_errors(options)]
        warnings: list[str] = []
        team_name: str | None = None

        if options.assignment_type == AssignmentType.TEAM:
            if options.user_ids:
                conflicts.append(TEAM_AND_USERS)
            if options.team_id:
                team = await self.team_repo.get_by_id_and_organization(
                    options.team_id, options.organization_id
                )
                if not team:
                    conflicts.append(TEAM_NOT_FOUND)
                else:
                    team_name = team.name
                    if not team.is_active:
                        warnings.append(TEAM_INACTIVE)
            return AssignmentValidation(
                conflicts=tuple(conflicts), warnings=tuple(warnings), team_name=team_name
            )

        if options.team_id:
            conflicts.append(TEAM_AND_USERS)
        if options.user_ids:
            unique_ids = list(dict.fromkeys(options.user_ids))
            if len(unique_ids) != len(options.user_ids):
                conflicts.append(DUPLICATE_USERS)
            users = await self.user_repo.get_by_ids(options.organization_id, unique_ids)
            if len([u for u in users if u.is_active]) != len(unique_ids):
                warnings.append(USERS_NOT_FOUND)
            if options.user_names is not None and len(options.user_names) != len(
                options.user_ids
            ):
                warnings.append(NAMES_MISMATCH)
        return AssignmentValidation(conflicts=tuple(conflicts), warnings=tuple(warnings))

    async def _current_source(self, organization_id: str, task_id: str) -> str:
        latest = await self.history_repo.get_latest(organization_id, task_id)
        if latest is None:
            return AssignmentSource.MANUAL.value
        return latest.assignment_source

    async def preview_assignment(self, options: AssignmentOptions) -> AssignmentPreview:
        """Dry-run assign_task: current vs. proposed, changes, conflicts. Never writes."""
        task = await self._load_task(options.organization_id, options.task_id)
        source = await self._current_source(options.organization_id, options.task_id)
        validation = await self.validate_assignment(options)
        options = _with_stored_team_name(options, validation)

        proposed = proposed_assignment(options)
        changes = compute_changes(task.assignment, proposed) if proposed is not None else []
        return AssignmentPreview(
            current_assignments=describe_assignment(task.assignment, source),
            proposed_assignments=describe_options(options),
            changes=tuple(changes),
            conflicts=validation.conflicts,
            warnings=validation.warnings,
        )

    async def _actor_snapshot(self, organization_id: str, user_id: str) -> dict[str, Any]:
        user = await self.user_repo.get_by_id_and_organization(user_id, organization_id)
        if not user:
            return {"id": user_id, "name": None, "email": None}
        return {"id": user.id, "name": user.name, "email": user.email}

    async def _commit(
        self,
        *,
        task: TaskResult,
        new_state: Assignment,
        history_type: HistoryAssignmentType,
        source: str,
        acting_user_id: str,
        notes: str | None,
    ) -> None:
        """Write the assignment, then append its history record."""
        actor = await self._actor_snapshot(task.organization_id, acting_user_id)
        updated = await self.task_repo.update_assignment(
            task.id, task.organization_id, new_state
        )
        if updated is None:
            raise ResourceNotFoundException("task", task.id)

        entry = AssignmentHistoryCreate(
            organization_id=task.organization_id,
            task_id=task.id,
            assignment_type=history_type,
            assignment_source=source,
            assigned_by=acting_user_id,
            assigned_by_user=actor,
            previous_assignment=assignment_snapshot(task.assignment),
            new_assignment=assignment_snapshot(new_state),
            notes=notes,
        )
        try:
            await self.history_repo.append(entry)
        except Exception as e:
            logger.error(
                "Assignment history append failed for task %s after assignment write: %s",
                task.id,
                e,
            )
            raise AssignmentHistoryWriteException(task.id, str(e)) from e

    async def assign_task(self, options: AssignmentOptions) -> bool:
        """Validate, write the new assignment, and append one history record.

        Raises:
            ValidationException: team mode without team_id, no users or a blank user id
                otherwise, or a user count that does not fit the assignment type.
            AssignmentConflictException: e.g. team does not exist in organization.
            ResourceNotFoundException: task not found in organization.
            AssignmentHistoryWriteException: history append failed after the write.
        """
        errors = required_field_errors(options)
        if errors:
            message, field = errors[0]
            raise ValidationException(message, field=field)

        validation = await self.validate_assignment(options)
        if not validation.is_valid:
            raise AssignmentConflictException(options.task_id, list(validation.conflicts))
        for warning in validation.warnings:
            logger.warning("Assignment of task %s: %s", options.task_id, warning)
        options = _with_stored_team_name(options, validation)

        task = await self._load_task(options.organization_id, options.task_id)
        new_state = proposed_assignment(options)
        # Options that pass both checks always describe a state.
        assert new_state is not None

        await self._commit(
            task=task,
            new_state=new_state,
            history_type=HistoryAssignmentType(options.assignment_type.value),
            source=options.assignment_source.value,
            acting_user_id=options.assigned_by,
            notes=options.notes,
        )
        logger.info(
            "Task %s assigned (%s) by %s",
            task.id,
            options.assignment_type.value,
            options.assigned_by,
        )
        return True

    async def unassign_task(
        self,
        task_id: str,
        organization_id: str,
        acting_user_id: str,
        notes: str | None = None,
    ) -> bool:
        """Clear every assignment field and log an 'unassigned' record, even if already unassigned."""
        task = await self._load_task(organization_id, task_id)
        await self._commit(
            task=task,
            new_state=Unassigned(),
            history_type=HistoryAssignmentType.UNASSIGNED,
            source=AssignmentSource.MANUAL.value,
            acting_user_id=acting_user_id,
            notes=notes,
        )
        logger.info("Task %s unassigned by %s", task_id, acting_user_id)
        return True

    async def get_assignment_history(
        self, organization_id: str, task_id: str, limit: int = 100
    ) -> list[AssignmentHistoryRecord]:
        """Return up to limit history records for task, newest first. Fresh read per call."""
        return await self.history_repo.list_by_task(
            organization_id, task_id, skip=0, limit=limit
        )

    async def iter_assignment_history(
        self, organization_id: str, task_id: str, page_size: int | None = None
    ) -> AsyncIterator[AssignmentHistoryRecord]:
        """Yield the whole history for task newest first, one page at a time.

        Each call starts a new read from the newest record.
        """
        size = page_size or self.history_page_size
        skip = 0
        seen: set[str] = set()
        while True:
            page = await self.history_repo.list_by_task(
                organization_id, task_id, skip=skip, limit=size
            )
            for record in page:
                # Rows appended mid-iteration shift offsets; skip repeats.
                if record.id in seen:
                    continue
                seen.add(record.id)
                yield record
            if len(page) < size:
                return
            skip += size

    async def check_project_assignment_conflicts(
        self, organization_id: str, project_id: str
    ) -> list[ProjectAssignmentConflict]:
        """Report project tasks that have no assignment at all."""
        tasks = await self.task_repo.list_by_project(organization_id, project_id)
        return [
            ProjectAssignmentConflict(
                task_id=t.id,
                task_title=t.title,
                conflict="Task has no assignments",
                type="no_assignment",
            )
            for t in tasks
            if isinstance(t.assignment, Unassigned)
        ]
