"""build_assignment_options: UI selection state to AssignmentOptions."""

import pytest

from app.application.dtos.assignment import AssignmentSelection, SelectedUser
from app.application.dtos.user import UserResult
from app.application.use_cases.assignments import (
    build_assignment_options,
    resolve_assignment_type,
)
from app.domain.enums import AssignmentSource, AssignmentType

ACTOR = UserResult(
    id="actor-1",
    organization_id="org-1",
    name="Dana Admin",
    email="dana@example.com",
    is_active=True,
)
ALICE = SelectedUser(id="u1", email="alice@example.com", name="Alice")
BOB = SelectedUser(id="u2", email="bob@example.com", name="Bob")


def _build(selection: AssignmentSelection, actor: UserResult = ACTOR):
    return build_assignment_options(
        selection, task_id="task-1", organization_id="org-1", acting_user=actor
    )


@pytest.mark.parametrize(
    "selected",
    [(), (ALICE,), (ALICE, BOB)],
)
def test_team_mode_omits_user_fields(selected) -> None:
    """Team tab: user_ids/user_names are None even when users were picked earlier."""
    options = _build(
        AssignmentSelection(
            mode=AssignmentType.TEAM,
            selected_users=selected,
            team_id="t1",
            team_name="Ops",
        )
    )
    assert options.assignment_type == AssignmentType.TEAM
    assert options.user_ids is None
    assert options.user_names is None
    assert options.team_id == "t1"
    assert options.team_name == "Ops"


@pytest.mark.parametrize("mode", [AssignmentType.INDIVIDUAL, AssignmentType.MULTIPLE])
def test_user_modes_omit_team_fields(mode) -> None:
    """Individual/multiple tabs: team_id/team_name are None even when a team was picked."""
    options = _build(
        AssignmentSelection(
            mode=mode, selected_users=(ALICE,), team_id="t1", team_name="Ops"
        )
    )
    assert options.team_id is None
    assert options.team_name is None
    assert options.user_ids == ("u1",)
    assert options.user_names == ("Alice",)


def test_type_follows_user_count_not_tab() -> None:
    """Two users on the individual tab report multiple; one user on the multiple tab reports individual."""
    two_on_individual = AssignmentSelection(
        mode=AssignmentType.INDIVIDUAL, selected_users=(ALICE, BOB)
    )
    one_on_multiple = AssignmentSelection(
        mode=AssignmentType.MULTIPLE, selected_users=(ALICE,)
    )
    assert resolve_assignment_type(two_on_individual) == AssignmentType.MULTIPLE
    assert resolve_assignment_type(one_on_multiple) == AssignmentType.INDIVIDUAL


def test_no_users_reports_individual_with_empty_ids() -> None:
    """Nothing picked: builder never fails; service rejects the empty id list later."""
    options = _build(AssignmentSelection(mode=AssignmentType.MULTIPLE))
    assert options.assignment_type == AssignmentType.INDIVIDUAL
    assert options.user_ids == ()
    assert options.team_id is None


def test_user_name_falls_back_to_email() -> None:
    nameless = SelectedUser(id="u3", email="carol@example.com")
    options = _build(
        AssignmentSelection(mode=AssignmentType.MULTIPLE, selected_users=(ALICE, nameless))
    )
    assert options.user_ids == ("u1", "u3")
    assert options.user_names == ("Alice", "carol@example.com")


def test_defaults_source_actor_and_notes() -> None:
    options = _build(AssignmentSelection(mode=AssignmentType.INDIVIDUAL, selected_users=(ALICE,)))
    assert options.assignment_source == AssignmentSource.MANUAL
    assert options.assigned_by == "actor-1"
    assert options.organization_id == "org-1"
    assert options.task_id == "task-1"
    assert options.notes == "Manual assignment by Dana Admin"


def test_default_notes_use_actor_email_without_name() -> None:
    actor = UserResult(
        id="actor-2", organization_id="org-1", name=None, email="ops@example.com", is_active=True
    )
    options = _build(
        AssignmentSelection(mode=AssignmentType.INDIVIDUAL, selected_users=(ALICE,)), actor
    )
    assert options.notes == "Manual assignment by ops@example.com"


def test_explicit_notes_are_kept() -> None:
    options = _build(
        AssignmentSelection(
            mode=AssignmentType.TEAM, team_id="t1", team_name="Ops", notes="Escalated"
        )
    )
    assert options.notes == "Escalated"
