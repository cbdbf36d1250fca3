"""Request context management using contextvars.

Holds request-scoped values (request id, organization, acting user) so log
records can carry them without threading them through every call.

Usage:
    set_request_id("3f2a...")
    set_request_actor(organization_id="org1", user_id="u1")
    ctx = get_request_context()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_organization_id: ContextVar[str | None] = ContextVar("organization_id", default=None)
_actor_id: ContextVar[str | None] = ContextVar("actor_id", default=None)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    organization_id: str | None
    actor_id: str | None


def set_request_id(request_id: str | None) -> None:
    """Set the request id for the current async task."""
    _request_id.set(request_id)


def set_request_actor(organization_id: str | None, user_id: str | None) -> None:
    """Record which organization and user the current request acts for."""
    _organization_id.set(organization_id)
    _actor_id.set(user_id)


def get_request_context() -> RequestContext:
    """Return a snapshot of request id, organization and actor."""
    return RequestContext(
        request_id=_request_id.get(),
        organization_id=_organization_id.get(),
        actor_id=_actor_id.get(),
    )


def clear_request_context() -> None:
    """Reset all request-scoped values (end of request or tests)."""
    _request_id.set(None)
    _organization_id.set(None)
    _actor_id.set(None)
