"""Seed dev data from scripts/seed-data.json into Postgres.

Creates users, teams and tasks per organization (users matched by email,
teams by name, tasks by title within project), then applies each task's
initial assignment through TaskAssignmentService so the history log starts
with a record of it.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: scripts/seed-data.json (relative to project root).
Requires: DATABASE_URL (postgresql+asyncpg) and: alembic upgrade head.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.assignment import AssignmentOptions
from app.application.use_cases.assignments import TaskAssignmentService
from app.domain.enums import AssignmentSource, AssignmentType
from app.domain.exceptions import AssignmentConflictException, ValidationException
from app.infrastructure.persistence.models import Task, Team, User
from app.infrastructure.persistence.repositories import (
    AssignmentHistoryRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def _get_or_create_user(session: AsyncSession, org: str, u: dict[str, Any]) -> User:
    result = await session.execute(
        select(User).where(User.organization_id == org, User.email == u["email"])
    )
    user = result.scalar_one_or_none()
    if user is None:
        user = User(
            organization_id=org,
            name=u.get("name"),
            email=u["email"],
            is_active=u.get("is_active", True),
        )
        session.add(user)
        await session.flush()
    return user


async def _get_or_create_team(session: AsyncSession, org: str, t: dict[str, Any]) -> Team:
    result = await session.execute(
        select(Team).where(Team.organization_id == org, Team.name == t["name"])
    )
    team = result.scalar_one_or_none()
    if team is None:
        team = Team(organization_id=org, name=t["name"], is_active=t.get("is_active", True))
        session.add(team)
        await session.flush()
    return team


async def _get_or_create_task(session: AsyncSession, org: str, t: dict[str, Any]) -> tuple[Task, bool]:
    result = await session.execute(
        select(Task).where(
            Task.organization_id == org,
            Task.project_id == t.get("project_id"),
            Task.title == t["title"],
        )
    )
    task = result.scalar_one_or_none()
    if task is not None:
        return task, False
    task = Task(
        organization_id=org,
        project_id=t.get("project_id"),
        title=t["title"],
        status=t.get("status", "open"),
        description=t.get("description"),
    )
    session.add(task)
    await session.flush()
    return task, True


def _initial_options(
    task: Task,
    spec: dict[str, Any],
    users: dict[str, User],
    teams: dict[str, Team],
    actor: User,
) -> AssignmentOptions:
    """Build options from a seed task's "assign_to" block: {"team": name} or {"users": [emails]}."""
    if "team" in spec:
        team = teams[spec["team"]]
        return AssignmentOptions(
            task_id=task.id,
            assignment_type=AssignmentType.TEAM,
            organization_id=task.organization_id,
            assigned_by=actor.id,
            assignment_source=AssignmentSource.PROJECT_INHERITED,
            team_id=team.id,
            team_name=team.name,
            notes="Seeded",
        )
    picked = [users[email] for email in spec.get("users", [])]
    return AssignmentOptions(
        task_id=task.id,
        assignment_type=AssignmentType.MULTIPLE if len(picked) > 1 else AssignmentType.INDIVIDUAL,
        organization_id=task.organization_id,
        assigned_by=actor.id,
        user_ids=tuple(u.id for u in picked),
        user_names=tuple(u.name or u.email for u in picked),
        notes="Seeded",
    )


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    from app.infrastructure.persistence import database as db_mod

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            svc = TaskAssignmentService(
                task_repo=TaskRepository(session),
                history_repo=AssignmentHistoryRepository(session),
                user_repo=UserRepository(session),
                team_repo=TeamRepository(session),
            )
            for org_data in data.get("organizations", []):
                org = org_data["id"]
                users = {
                    u["email"]: await _get_or_create_user(session, org, u)
                    for u in org_data.get("users", [])
                }
                teams = {
                    t["name"]: await _get_or_create_team(session, org, t)
                    for t in org_data.get("teams", [])
                }
                if not users:
                    print(f"Organization {org}: no users, skipping tasks", file=sys.stderr)
                    continue
                actor = next(iter(users.values()))
                print(f"Organization {org}: {len(users)} users, {len(teams)} teams")

                for t in org_data.get("tasks", []):
                    task, created = await _get_or_create_task(session, org, t)
                    if not created or "assign_to" not in t:
                        continue
                    try:
                        options = _initial_options(task, t["assign_to"], users, teams, actor)
                        await svc.assign_task(options)
                    except (KeyError, ValidationException, AssignmentConflictException) as e:
                        print(f"  Skip assignment of {t['title']!r}: {e}", file=sys.stderr)
                        continue
                    print(f"  Task {t['title']!r} -> {task.id}")

    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
