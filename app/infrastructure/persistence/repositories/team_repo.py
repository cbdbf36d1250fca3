"""Team repository: existence and active-flag lookups for team assignment."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.team import TeamResult
from app.infrastructure.persistence.models.team import Team
from app.infrastructure.persistence.repositories.base import BaseRepository, gateway_errors


class TeamRepository(BaseRepository[Team]):
    """Team repository. Implements ITeamRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Team)

    async def get_by_id_and_organization(
        self, team_id: str, organization_id: str
    ) -> TeamResult | None:
        with gateway_errors("team.get"):
            team = await self._get_scoped(team_id, organization_id)
        if team is None:
            return None
        return TeamResult(
            id=team.id,
            organization_id=team.organization_id,
            name=team.name,
            is_active=team.is_active,
        )
