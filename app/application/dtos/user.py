"""DTOs for users (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model used for assignee lookups and actor denormalization."""

    id: str
    organization_id: str
    name: str | None
    email: str
    is_active: bool

    @property
    def display_name(self) -> str:
        """Name, falling back to email."""
        return self.name or self.email
