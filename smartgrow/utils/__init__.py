"""
Utility functions for the calculation core.

Date bucketing helpers and display formatters.
"""

from smartgrow.utils.dates import (
    ensure_utc,
    utc_day_start,
    utc_day_window,
    whole_periods_between,
)
from smartgrow.utils.formatters import (
    format_collection_summary,
    format_currency,
    format_date,
    format_days,
    format_percentage,
)

__all__ = [
    "ensure_utc",
    "utc_day_start",
    "utc_day_window",
    "whole_periods_between",
    "format_currency",
    "format_percentage",
    "format_days",
    "format_date",
    "format_collection_summary",
]
