"""
Date resolution for the top-pageviews lookup.

Analytics datasets are published per UTC calendar day. A caller a few hours
ahead of UTC can ask for "today" while that day does not exist yet in UTC, so
requested dates are reconciled against the UTC calendar date.

Dates are plain ``datetime.date`` values once parsed. Comparisons use
``(year, month, day)`` tuples, never timestamps.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


def utc_today(now: datetime | None = None) -> date:
    """Current calendar date in UTC."""
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        return current.date()
    return current.astimezone(timezone.utc).date()


def parse_date(text: str, today: date | None = None) -> date:
    """
    Parse a free-form date expression.

    Empty or unparseable text yields ``today``. Missing components
    ("March 1") are filled in from ``today``.

    Args:
        text: Date expression, e.g. "2020-06-04", "March 1 2020", "06/04/2020"
        today: Reference date (default: local calendar date)

    Returns:
        Parsed calendar date
    """
    reference = today or date.today()
    text = text.strip()
    if not text:
        return reference

    try:
        parsed = date_parser.parse(text, default=datetime.combine(reference, time()))
    except (ValueError, OverflowError) as e:
        logger.warning(f"Failed to parse date string {text!r}, using {reference.isoformat()}: {e}")
        return reference

    logger.debug(f"Parsed date string {text!r} into {parsed.date().isoformat()}")
    return parsed.date()


def is_before_utc_today(requested: date, today: date | None = None) -> bool:
    """
    Whether the requested day is on or before the UTC calendar date.

    Year, then month, then day take priority, as in a lexicographic
    date comparison.

    Args:
        requested: Calendar date asked for
        today: UTC calendar date (default: :func:`utc_today`)
    """
    current = today or utc_today()
    return (requested.year, requested.month, requested.day) <= (current.year, current.month, current.day)


def correct_requested_date(requested: date, today: date | None = None) -> tuple[date, bool]:
    """
    Step back one day when the requested date is not published yet.

    Only one step is taken; no search further back.

    Returns:
        ``(date_to_query, corrected)``
    """
    if is_before_utc_today(requested, today):
        return requested, False

    corrected = requested - timedelta(days=1)
    logger.info(f"No pageview data yet for {requested.isoformat()}, using {corrected.isoformat()}")
    return corrected, True
