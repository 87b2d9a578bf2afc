"""Date parsing and UTC day-boundary reconciliation."""

from .resolver import correct_requested_date, is_before_utc_today, parse_date, utc_today

__all__ = [
    "correct_requested_date",
    "is_before_utc_today",
    "parse_date",
    "utc_today",
]
