"""TaskAssignmentService tests over in-memory repositories (and AsyncMock for failures)."""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.assignment import AssignmentOptions
from app.application.use_cases.assignments import TaskAssignmentService
from app.domain.enums import AssignmentSource, AssignmentType, HistoryAssignmentType
from app.domain.exceptions import (
    AssignmentConflictException,
    AssignmentHistoryWriteException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.assignment import Individuals, Team, Unassigned
from app.infrastructure.exceptions import GatewayException
from tests.fakes import ACTOR_ID, ORG, InMemoryStore, make_service


def _individual(task_id: str = "task-1", ids=("u1",), names=("Alice",), **kwargs) -> AssignmentOptions:
    return AssignmentOptions(
        task_id=task_id,
        assignment_type=AssignmentType.MULTIPLE if len(ids) > 1 else AssignmentType.INDIVIDUAL,
        organization_id=ORG,
        assigned_by=ACTOR_ID,
        user_ids=tuple(ids),
        user_names=tuple(names),
        **kwargs,
    )


def _team(task_id: str = "task-1", team_id: str = "t1", team_name: str = "Ops", **kwargs) -> AssignmentOptions:
    return AssignmentOptions(
        task_id=task_id,
        assignment_type=AssignmentType.TEAM,
        organization_id=ORG,
        assigned_by=ACTOR_ID,
        team_id=team_id,
        team_name=team_name,
        **kwargs,
    )


@pytest.fixture
def seeded(store: InMemoryStore) -> InMemoryStore:
    store.add_user("u1", "Alice")
    store.add_user("u2", "Bob")
    store.add_team("t1", "Ops")
    store.add_team("t2", "Support")
    return store


async def test_assign_individual_from_unassigned(seeded: InMemoryStore) -> None:
    """Unassigned task assigned to u1: ids set, no team, one history row with Alice."""
    seeded.add_task("task-1")
    svc = make_service(seeded)

    assert await svc.assign_task(_individual()) is True

    task = seeded.tasks["task-1"]
    assert task.assignment == Individuals(user_ids=("u1",), user_names=("Alice",))
    assert len(seeded.history) == 1
    row = seeded.history[0]
    assert row.assignment_type == "individual"
    assert row.new_assignment == {"assigned_to_ids": ["u1"], "assigned_to_names": ["Alice"]}
    assert row.previous_assignment is None
    assert row.assigned_by == ACTOR_ID
    assert row.assigned_by_user == {"id": ACTOR_ID, "name": "Dana Admin", "email": "dana@example.com"}


async def test_assign_team_replaces_users(seeded: InMemoryStore) -> None:
    """Task held by u1 assigned to team t1: users cleared, history shows team name."""
    seeded.add_task("task-1", Individuals(user_ids=("u1",), user_names=("Alice",)))
    svc = make_service(seeded)

    await svc.assign_task(_team())

    assert seeded.tasks["task-1"].assignment == Team(team_id="t1", team_name="Ops")
    row = seeded.history[-1]
    assert row.assignment_type == "team"
    assert row.new_assignment == {"assigned_to_team_id": "t1", "assigned_to_team_name": "Ops"}
    assert row.previous_assignment == {"assigned_to_ids": ["u1"], "assigned_to_names": ["Alice"]}


async def test_assign_then_history_newest_matches_commit(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    await svc.assign_task(_team())
    await svc.assign_task(_individual(ids=("u1", "u2"), names=("Alice", "Bob"), notes="handoff"))

    history = await svc.get_assignment_history(ORG, "task-1")
    assert len(history) == 2
    newest = history[0]
    assert newest.assignment_type == "multiple"
    assert newest.new_assignment == {
        "assigned_to_ids": ["u1", "u2"],
        "assigned_to_names": ["Alice", "Bob"],
    }
    assert newest.notes == "handoff"
    assert history[1].assignment_type == "team"


async def test_unassign_team(seeded: InMemoryStore) -> None:
    """Task on team t1 unassigned: team cleared, history row 'unassigned' without new_assignment."""
    seeded.add_task("task-1", Team(team_id="t1", team_name="Ops"))
    svc = make_service(seeded)

    assert await svc.unassign_task("task-1", ORG, ACTOR_ID) is True

    assert seeded.tasks["task-1"].assignment == Unassigned()
    row = seeded.history[-1]
    assert row.assignment_type == "unassigned"
    assert row.new_assignment is None
    assert row.previous_assignment == {"assigned_to_team_id": "t1", "assigned_to_team_name": "Ops"}


async def test_unassign_already_unassigned_still_logs_once(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    assert await svc.unassign_task("task-1", ORG, ACTOR_ID, notes="cleanup") is True

    assert seeded.tasks["task-1"].assignment == Unassigned()
    assert len(seeded.history) == 1
    assert seeded.history[0].assignment_type == "unassigned"
    assert seeded.history[0].new_assignment is None
    assert seeded.history[0].notes == "cleanup"


@pytest.mark.parametrize(
    "options",
    [
        _team(team_id=""),
        _team(team_id="missing"),
        _individual(ids=(), names=()),
        _team(team_id="t2", team_name="Support"),
        _individual(ids=("u2",), names=("Bob",)),
    ],
)
async def test_preview_never_writes(seeded: InMemoryStore, options: AssignmentOptions) -> None:
    """Preview leaves task and history untouched, with or without conflicts."""
    seeded.add_task("task-1", Team(team_id="t1", team_name="Ops"))
    before = seeded.tasks["task-1"]
    svc = make_service(seeded)

    await svc.preview_assignment(options)
    await svc.preview_assignment(options)

    assert seeded.tasks["task-1"] == before
    assert seeded.task_writes == 0
    assert seeded.history == []


async def test_preview_team_without_id_blocks_commit(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team(team_id="", team_name=None))

    assert preview.conflicts
    assert preview.can_confirm is False
    assert preview.changes == ()


async def test_preview_unknown_team_is_conflict(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team(team_id="missing", team_name="Ghosts"))

    assert "Assigned team does not exist" in preview.conflicts
    assert preview.can_confirm is False


async def test_preview_empty_users_is_conflict(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_individual(ids=(), names=()))

    assert "At least one user must be selected" in preview.conflicts
    assert preview.can_confirm is False


async def test_preview_same_team_has_no_changes(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1", Team(team_id="t1", team_name="Ops"))
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team())

    assert preview.changes == ()
    assert preview.conflicts == ()
    assert preview.can_confirm is True


async def test_preview_same_users_reordered_has_no_changes(seeded: InMemoryStore) -> None:
    seeded.add_task(
        "task-1", Individuals(user_ids=("u1", "u2"), user_names=("Alice", "Bob"))
    )
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_individual(ids=("u2", "u1"), names=("Bob", "Alice")))

    assert preview.changes == ()


async def test_preview_descriptors_and_changes(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1", Team(team_id="t1", team_name="Ops"))
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team(team_id="t2", team_name="Support"))

    assert preview.current_assignments.team.name == "Ops"
    assert preview.current_assignments.source == "manual"
    assert preview.proposed_assignments.team.name == "Support"
    assert preview.proposed_assignments.individual is None
    assert preview.changes == ("Team changed from Ops to Support",)


async def test_preview_current_source_comes_from_latest_history(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)
    await svc.assign_task(_team(assignment_source=AssignmentSource.PROJECT_INHERITED))

    preview = await svc.preview_assignment(_individual())

    assert preview.current_assignments.source == "project_inherited"
    assert preview.proposed_assignments.source == "manual"


async def test_preview_inactive_team_is_warning_not_conflict(seeded: InMemoryStore) -> None:
    seeded.add_team("t9", "Retired", is_active=False)
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team(team_id="t9", team_name="Retired"))

    assert preview.conflicts == ()
    assert "Assigned team is not active" in preview.warnings
    assert preview.can_confirm is True


async def test_preview_unknown_user_is_warning(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_individual(ids=("u1", "ghost"), names=("Alice", "Ghost")))

    assert preview.conflicts == ()
    assert "Some assigned users may not exist or are inactive" in preview.warnings


async def test_preview_missing_task_raises(seeded: InMemoryStore) -> None:
    svc = make_service(seeded)
    with pytest.raises(ResourceNotFoundException):
        await svc.preview_assignment(_individual(task_id="nope"))


async def test_assign_team_without_id_is_validation_error(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    with pytest.raises(ValidationException) as exc_info:
        await svc.assign_task(_team(team_id=None, team_name=None))

    assert exc_info.value.details == {"field": "team_id"}
    assert seeded.task_writes == 0
    assert seeded.history == []


async def test_assign_without_users_is_validation_error(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    with pytest.raises(ValidationException) as exc_info:
        await svc.assign_task(_individual(ids=(), names=()))

    assert exc_info.value.error_code == "VALIDATION_ERROR"
    assert exc_info.value.details == {"field": "user_ids"}
    assert seeded.task_writes == 0


async def test_validation_error_never_reaches_repositories() -> None:
    """Structural checks run before any repository call."""
    task_repo, history_repo, user_repo, team_repo = AsyncMock(), AsyncMock(), AsyncMock(), AsyncMock()
    svc = TaskAssignmentService(task_repo, history_repo, user_repo, team_repo)
    with pytest.raises(ValidationException):
        await svc.assign_task(_team(team_id=""))

    task_repo.get_by_id_and_organization.assert_not_awaited()
    task_repo.update_assignment.assert_not_awaited()
    team_repo.get_by_id_and_organization.assert_not_awaited()
    history_repo.append.assert_not_awaited()


async def test_assign_unknown_team_is_conflict(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    with pytest.raises(AssignmentConflictException) as exc_info:
        await svc.assign_task(_team(team_id="missing"))

    assert exc_info.value.error_code == "ASSIGNMENT_CONFLICT"
    assert exc_info.value.details["conflicts"] == ["Assigned team does not exist"]
    assert seeded.task_writes == 0
    assert seeded.history == []


async def test_assign_duplicate_users_is_conflict(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    with pytest.raises(AssignmentConflictException):
        await svc.assign_task(_individual(ids=("u1", "u1"), names=("Alice", "Alice")))
    assert seeded.task_writes == 0


async def test_blank_user_id_blocks_preview_and_commit(seeded: InMemoryStore) -> None:
    """A blank id among the users is caught by preview and rejected at commit with the same field."""
    seeded.add_task("task-1")
    svc = make_service(seeded)
    options = _individual(ids=("u1", ""), names=("Alice", "Nobody"))

    preview = await svc.preview_assignment(options)

    assert "Selected users must have an id" in preview.conflicts
    assert preview.can_confirm is False

    with pytest.raises(ValidationException) as exc_info:
        await svc.assign_task(options)

    assert str(exc_info.value) == "Selected users must have an id"
    assert exc_info.value.details == {"field": "user_ids"}
    assert seeded.task_writes == 0
    assert seeded.history == []


@pytest.mark.parametrize(
    ("assignment_type", "ids", "names"),
    [
        (AssignmentType.INDIVIDUAL, ("u1", "u2"), ("Alice", "Bob")),
        (AssignmentType.MULTIPLE, ("u1",), ("Alice",)),
    ],
)
async def test_type_not_matching_user_count_is_rejected(
    seeded: InMemoryStore, assignment_type: AssignmentType, ids, names
) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)
    options = replace(_individual(ids=ids, names=names), assignment_type=assignment_type)

    preview = await svc.preview_assignment(options)
    assert preview.can_confirm is False

    with pytest.raises(ValidationException) as exc_info:
        await svc.assign_task(options)

    assert exc_info.value.details == {"field": "assignment_type"}
    assert seeded.history == []


async def test_team_name_falls_back_to_stored_team(seeded: InMemoryStore) -> None:
    """Team options without a name use the team row's name on the task and in history."""
    seeded.add_task("task-1")
    svc = make_service(seeded)

    preview = await svc.preview_assignment(_team(team_name=None))
    assert preview.proposed_assignments.team.name == "Ops"
    assert preview.changes == ("Assigned to team Ops",)

    await svc.assign_task(_team(team_name=None))

    assert seeded.tasks["task-1"].assignment == Team(team_id="t1", team_name="Ops")
    assert seeded.history[-1].new_assignment == {
        "assigned_to_team_id": "t1",
        "assigned_to_team_name": "Ops",
    }


async def test_assign_missing_task_raises_not_found(seeded: InMemoryStore) -> None:
    svc = make_service(seeded)

    with pytest.raises(ResourceNotFoundException) as exc_info:
        await svc.assign_task(_individual(task_id="nope"))

    assert exc_info.value.details == {"resource_type": "task", "resource_id": "nope"}
    assert seeded.history == []


async def test_assign_task_in_other_organization_is_not_found(seeded: InMemoryStore) -> None:
    seeded.add_task("task-x", organization_id="org-2")
    svc = make_service(seeded)

    with pytest.raises(ResourceNotFoundException):
        await svc.assign_task(_individual(task_id="task-x"))


async def test_history_append_failure_is_reported(seeded: InMemoryStore) -> None:
    """A failed history append raises instead of leaving an unaudited write."""
    seeded.add_task("task-1")
    svc = make_service(seeded)
    svc.history_repo.append = AsyncMock(side_effect=GatewayException("assignment_history.append", "boom"))

    with pytest.raises(AssignmentHistoryWriteException) as exc_info:
        await svc.assign_task(_individual())

    assert exc_info.value.error_code == "ASSIGNMENT_HISTORY_WRITE_FAILED"
    assert exc_info.value.details["task_id"] == "task-1"
    assert "assignment_history.append" in exc_info.value.details["reason"]


async def test_gateway_failure_on_read_propagates(seeded: InMemoryStore) -> None:
    """Read failures surface as GatewayException, distinct from validation errors."""
    svc = make_service(seeded)
    svc.task_repo.get_by_id_and_organization = AsyncMock(
        side_effect=GatewayException("task.get", "connection refused")
    )

    with pytest.raises(GatewayException) as exc_info:
        await svc.assign_task(_individual())

    assert exc_info.value.error_code == "GATEWAY_ERROR"
    assert seeded.history == []


async def test_actor_snapshot_for_unknown_actor(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)

    await svc.unassign_task("task-1", ORG, "someone-else")

    assert seeded.history[0].assigned_by_user == {"id": "someone-else", "name": None, "email": None}


async def test_get_current_assignment(seeded: InMemoryStore) -> None:
    seeded.add_task(
        "task-1",
        Individuals(user_ids=("u1", "u2", "u3"), user_names=("Alice", "Bob", "Carol")),
    )
    svc = make_service(seeded)

    current = await svc.get_current_assignment(ORG, "task-1")

    assert current.task_id == "task-1"
    assert current.assignment_type == HistoryAssignmentType.MULTIPLE
    assert current.display_text == "3 members: Alice, Bob..."
    assert [a.name for a in current.assignments.individual] == ["Alice", "Bob", "Carol"]


async def test_history_limit_and_restartable_iteration(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded, history_page_size=2)
    for _ in range(5):
        await svc.unassign_task("task-1", ORG, ACTOR_ID)

    limited = await svc.get_assignment_history(ORG, "task-1", limit=3)
    assert [r.sequence for r in limited] == [5, 4, 3]

    first = [r.sequence async for r in svc.iter_assignment_history(ORG, "task-1")]
    second = [r.sequence async for r in svc.iter_assignment_history(ORG, "task-1")]
    assert first == [5, 4, 3, 2, 1]
    assert second == first


async def test_iter_history_empty(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1")
    svc = make_service(seeded)
    assert [r async for r in svc.iter_assignment_history(ORG, "task-1")] == []


async def test_project_conflicts_report_unassigned_tasks(seeded: InMemoryStore) -> None:
    seeded.add_task("task-1", title="Write docs")
    seeded.add_task("task-2", Team(team_id="t1", team_name="Ops"))
    seeded.add_task("task-3", project_id="proj-2")
    svc = make_service(seeded)

    conflicts = await svc.check_project_assignment_conflicts(ORG, "proj-1")

    assert len(conflicts) == 1
    assert conflicts[0].task_id == "task-1"
    assert conflicts[0].task_title == "Write docs"
    assert conflicts[0].conflict == "Task has no assignments"
    assert conflicts[0].type == "no_assignment"
