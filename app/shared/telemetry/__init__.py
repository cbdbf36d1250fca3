"""Shared telemetry: logging setup with request-context enrichment."""

from app.shared.telemetry.logging import LOG_FORMAT, RequestContextFilter, setup_logging

__all__ = ["LOG_FORMAT", "RequestContextFilter", "setup_logging"]
