"""User repository: read-only lookups for assignees and the acting user."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository, gateway_errors


def _to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        organization_id=u.organization_id,
        name=u.name,
        email=u.email,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id_and_organization(
        self, user_id: str, organization_id: str
    ) -> UserResult | None:
        with gateway_errors("user.get"):
            user = await self._get_scoped(user_id, organization_id)
        return _to_result(user) if user else None

    async def get_by_ids(
        self, organization_id: str, user_ids: list[str]
    ) -> list[UserResult]:
        """Return users of organization among user_ids. Unknown ids are skipped."""
        if not user_ids:
            return []
        stmt = select(User).where(
            User.organization_id == organization_id, User.id.in_(user_ids)
        )
        with gateway_errors("user.get_by_ids"):
            result = await self.db.execute(stmt)
            rows = list(result.scalars().all())
        return [_to_result(u) for u in rows]
