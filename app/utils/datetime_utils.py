"""
Datetime utilities.

Timezone-aware helpers for the services layer.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Current UTC datetime with timezone info."""
    return datetime.now(UTC)


def term_end(start: datetime, duration_days: int) -> datetime:
    """
    End of a fixed term starting at ``start``.

    Args:
        start: Term start
        duration_days: Term length in days

    Returns:
        start + duration_days * 24h
    """
    return start + timedelta(days=duration_days)
