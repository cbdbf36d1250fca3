"""Organization ID format validation for request scoping.

Used by get_organization_id so malformed organization headers are rejected
before any repository query runs.
"""

import re

# CUID/UUID-style: alphanumeric, hyphen, underscore; matches organization_id column width.
ORGANIZATION_ID_MAX_LENGTH = 64
_ORGANIZATION_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(ORGANIZATION_ID_MAX_LENGTH) + r"}$"
)


def is_valid_organization_id_format(value: str) -> bool:
    """Return True if value is a well-formed organization id."""
    if not value or len(value) > ORGANIZATION_ID_MAX_LENGTH:
        return False
    return bool(_ORGANIZATION_ID_RE.fullmatch(value))
