"""Settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults_without_database() -> None:
    settings = Settings(_env_file=None, database_url="")
    assert settings.organization_header_name == "X-Organization-ID"
    assert settings.actor_header_name == "X-User-ID"
    assert settings.history_page_size == 50


def test_async_database_url_accepted() -> None:
    settings = Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@localhost:5432/opsdesk"
    )
    assert settings.database_url.startswith("postgresql+asyncpg://")


def test_sync_database_url_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="postgresql://u:p@localhost:5432/opsdesk")


def test_history_limits_validated() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, history_page_size=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, history_page_size=100, history_max_limit=10)
