"""Task assignment state as a tagged union.

A task is assigned to nobody, to a set of individual users, or to one team.
Each variant is an immutable value object; the four optional task columns
(user ids/names, team id/name) are only used at the persistence boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.domain.enums import HistoryAssignmentType

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"
UNKNOWN_TEAM_NAME = "Unknown Team"


@dataclass(frozen=True)
class Unassigned:
    """No user or team is responsible for the task."""


@dataclass(frozen=True)
class Individuals:
    """One or more users, names in the same order as ids."""

    user_ids: tuple[str, ...]
    user_names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.user_ids:
            raise ValueError("Individual assignment requires at least one user id")
        if any(not uid for uid in self.user_ids):
            raise ValueError("User ids must be non-empty strings")
        if len(set(self.user_ids)) != len(self.user_ids):
            raise ValueError("User ids must be unique")
        if len(self.user_names) != len(self.user_ids):
            raise ValueError("user_names must have one entry per user id")

    @classmethod
    def from_lists(
        cls, user_ids: list[str] | tuple[str, ...], user_names: list[str] | tuple[str, ...] | None
    ) -> Individuals:
        """Build from possibly ragged lists; missing names become 'Unknown'."""
        names = list(user_names or [])
        padded = [
            (names[i] if i < len(names) and names[i] else UNKNOWN_NAME)
            for i in range(len(user_ids))
        ]
        return cls(user_ids=tuple(user_ids), user_names=tuple(padded))

    @property
    def kind(self) -> HistoryAssignmentType:
        return (
            HistoryAssignmentType.MULTIPLE
            if len(self.user_ids) > 1
            else HistoryAssignmentType.INDIVIDUAL
        )

    def members(self) -> list[tuple[str, str]]:
        """Return (user_id, user_name) pairs in stored order."""
        return list(zip(self.user_ids, self.user_names))

    def same_users(self, other: Individuals) -> bool:
        """True when both hold the same set of user ids (order-independent)."""
        return set(self.user_ids) == set(other.user_ids)


@dataclass(frozen=True)
class Team:
    """A whole team is responsible for the task."""

    team_id: str
    team_name: str

    def __post_init__(self) -> None:
        if not self.team_id:
            raise ValueError("Team assignment requires a team id")


Assignment = Unassigned | Individuals | Team


def assignment_kind(assignment: Assignment) -> HistoryAssignmentType:
    """Return the history assignment_type for a state."""
    if isinstance(assignment, Team):
        return HistoryAssignmentType.TEAM
    if isinstance(assignment, Individuals):
        return assignment.kind
    return HistoryAssignmentType.UNASSIGNED


def assignment_from_fields(
    *,
    assigned_to_id: str | None,
    assigned_to_name: str | None,
    assigned_to_ids: list[str] | None,
    assigned_to_names: list[str] | None,
    assigned_to_team_id: str | None,
    assigned_to_team_name: str | None,
    task_id: str | None = None,
) -> Assignment:
    """Fold stored task columns into one assignment state.

    Team columns win over user columns; the multi-user list wins over the
    legacy single-assignee pair.
    """
    has_users = bool(assigned_to_ids) or bool(assigned_to_id)
    if assigned_to_team_id:
        if has_users:
            logger.warning(
                "Task %s has both team and user assignment columns set; using team",
                task_id,
            )
        return Team(
            team_id=assigned_to_team_id,
            team_name=assigned_to_team_name or UNKNOWN_TEAM_NAME,
        )
    if assigned_to_ids:
        # Drop duplicates while keeping first occurrence order
        seen: dict[str, str] = {}
        names = list(assigned_to_names or [])
        for i, uid in enumerate(assigned_to_ids):
            if uid and uid not in seen:
                seen[uid] = names[i] if i < len(names) and names[i] else UNKNOWN_NAME
        if seen:
            return Individuals(
                user_ids=tuple(seen.keys()), user_names=tuple(seen.values())
            )
    if assigned_to_id:
        return Individuals(
            user_ids=(assigned_to_id,),
            user_names=(assigned_to_name or UNKNOWN_NAME,),
        )
    return Unassigned()


def assignment_snapshot(assignment: Assignment) -> dict[str, Any] | None:
    """Structured snapshot stored on history rows (None when unassigned)."""
    if isinstance(assignment, Team):
        return {
            "assigned_to_team_id": assignment.team_id,
            "assigned_to_team_name": assignment.team_name,
        }
    if isinstance(assignment, Individuals):
        return {
            "assigned_to_ids": list(assignment.user_ids),
            "assigned_to_names": list(assignment.user_names),
        }
    return None
