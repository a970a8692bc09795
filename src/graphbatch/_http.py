"""Wire-level constants for the batch envelope conventions.

Key names are dictated by the remote service and are case-sensitive.
"""

from __future__ import annotations

ERROR_KEYS: tuple[str, ...] = ("error", "error_code", "error_msg", "error_reason")
CODE_KEY = "code"
BODY_KEY = "body"

# Responses at or above this status are read from the error side.
ERROR_STATUS_THRESHOLD = 400


def is_success_status(status_code: int) -> bool:
    """Return True for statuses in the inclusive-exclusive range [200, 300)."""
    return 200 <= status_code < 300
