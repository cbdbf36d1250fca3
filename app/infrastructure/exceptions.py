"""Infrastructure exceptions for persistence operations.

Gateway errors extend OpsDeskException so presentation can map them
to HTTP responses consistently, and so callers can tell "could not be
saved" apart from "could not be validated".
"""

from app.domain.exceptions import OpsDeskException


class GatewayException(OpsDeskException):
    """Database or network failure while reading or writing assignment data."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistence operation failed: {operation}",
            "GATEWAY_ERROR",
            {"operation": operation, "reason": reason},
        )
