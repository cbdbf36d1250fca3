"""DTOs for teams (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TeamResult:
    """Team read-model (existence and active flag for assignment validation)."""

    id: str
    organization_id: str
    name: str
    is_active: bool
