"""Request id sanitization and request-context log enrichment."""

import logging

from app.middleware.request_id import sanitize_request_id
from app.shared.context import (
    clear_request_context,
    get_request_context,
    set_request_actor,
    set_request_id,
)
from app.shared.telemetry import RequestContextFilter


def test_sanitize_keeps_safe_ids() -> None:
    assert sanitize_request_id("req-123_abc") == "req-123_abc"
    assert sanitize_request_id("  padded  ") == "padded"


def test_sanitize_replaces_unsafe_ids() -> None:
    for raw in (None, "", "bad id\nforged", "x" * 65):
        generated = sanitize_request_id(raw)
        assert generated != raw
        assert len(generated) == 36


def test_filter_adds_context_to_records() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    set_request_id("req-1")
    set_request_actor("org-1", "u1")
    try:
        assert RequestContextFilter().filter(record) is True
        assert record.request_id == "req-1"
        assert record.organization_id == "org-1"
        assert get_request_context().actor_id == "u1"
    finally:
        clear_request_context()

    blank = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    RequestContextFilter().filter(blank)
    assert blank.request_id == "-"
    assert blank.organization_id == "-"
