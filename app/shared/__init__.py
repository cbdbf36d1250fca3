"""Shared utilities: request context, logging, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestContext,
    clear_request_context,
    get_request_context,
    set_request_actor,
    set_request_id,
)
from app.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "RequestContext",
    "clear_request_context",
    "ensure_utc",
    "generate_cuid",
    "get_request_context",
    "set_request_actor",
    "set_request_id",
    "utc_now",
]
