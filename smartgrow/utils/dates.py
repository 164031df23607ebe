"""
Date helpers shared by the calculators.

Two day conventions exist side by side:

- rolling 24-hour periods counted from an anchor (income collection);
- UTC calendar days starting at midnight (commission today/yesterday).

They are intentionally kept separate.
"""

from datetime import UTC, datetime, timedelta

from smartgrow.constants import COLLECTION_PERIOD

ONE_DAY = timedelta(days=1)


def ensure_utc(value: datetime) -> datetime:
    """
    Return a timezone-aware UTC datetime.

    Naive datetimes are interpreted as UTC, which is how the data store
    writes its timestamps.

    Args:
        value: Datetime to normalize

    Returns:
        Datetime in UTC
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def whole_periods_between(
    anchor: datetime,
    now: datetime,
    period: timedelta = COLLECTION_PERIOD,
) -> int:
    """
    Count whole periods elapsed between two instants.

    Negative spans count as zero.

    Example:
        >>> start = datetime(2024, 1, 1, tzinfo=UTC)
        >>> whole_periods_between(start, start + timedelta(hours=47))
        1
    """
    elapsed = ensure_utc(now) - ensure_utc(anchor)
    if elapsed <= timedelta(0):
        return 0
    return elapsed // period


def utc_day_start(now: datetime) -> datetime:
    """Midnight UTC of the calendar day containing ``now``."""
    return ensure_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)


def utc_day_window(now: datetime, days_back: int = 0) -> tuple[datetime, datetime]:
    """
    Half-open UTC calendar day window ``[start, end)``.

    Args:
        now: Reference instant
        days_back: 0 for the day of ``now``, 1 for the day before, etc.

    Returns:
        Tuple of (start, end)
    """
    start = utc_day_start(now) - ONE_DAY * days_back
    return start, start + ONE_DAY


def in_window(moment: datetime, window: tuple[datetime, datetime]) -> bool:
    start, end = window
    return start <= ensure_utc(moment) < end
