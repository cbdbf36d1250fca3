"""Base repository: organization-scoped lookups and gateway error translation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.exceptions import GatewayException
from app.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def gateway_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy/driver errors raised inside the block into GatewayException."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Gateway operation %s failed: %s", operation, e)
        raise GatewayException(operation, str(e)) from e


class BaseRepository(Generic[ModelType]):
    """Base repository for organization-scoped models.

    Every read filters on organization_id so one organization never sees
    another's rows.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_scoped(self, entity_id: str, organization_id: str) -> ModelType | None:
        """Return a single row by primary key within organization, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(
                model.id == entity_id,
                model.organization_id == organization_id,
            )
        )
        return result.scalar_one_or_none()
