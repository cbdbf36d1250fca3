"""User ORM model (organization-scoped). Only what assignment needs: name, email, active flag."""

from sqlalchemy import Boolean, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class User(OrganizationScopedModel, Base):
    """User model. Table: app_user. Unique (organization_id, email)."""

    __tablename__ = "app_user"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "email", name="uq_organization_email"),
    )
