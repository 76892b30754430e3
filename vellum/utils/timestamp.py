"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now_exact() -> str:
    """
    Current UTC time as an ISO 8601 string with millisecond precision.

    Example:
        now_exact()
        # "2025-11-13T18:45:40.572Z"
    """
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def session_stamp() -> str:
    """Compact local timestamp for log directory names (e.g., "20251113_184540")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
