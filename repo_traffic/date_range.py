#!/usr/bin/env python3
"""
Date range helpers for finding days missing from a traffic snapshot.
"""

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Union

from .errors import InvalidRangeError

DateLike = Union[date, datetime, str]


def to_day(value: DateLike) -> date:
    """Truncate a date, datetime or ISO string to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def compute_missing_dates(repo_created_at: DateLike, latest_snapshot_date: DateLike,
                          today: Optional[date] = None) -> Optional[List[date]]:
    """
    List the days between a repository's creation and its latest snapshot.

    Args:
        repo_created_at: When the repository was created
        latest_snapshot_date: When the latest snapshot was stored
        today: Reference date (defaults to the current UTC date)

    Returns:
        None when the snapshot is from today or yesterday, since GitHub has
        nothing older to offer. Otherwise every day strictly between the two
        dates in ascending order.

    Raises:
        InvalidRangeError: If the repository was created after the snapshot
    """
    created = to_day(repo_created_at)
    latest = to_day(latest_snapshot_date)
    if created > latest:
        raise InvalidRangeError(f"Repository created {created} after snapshot date {latest}")

    today = today or utc_today()
    if latest >= today - timedelta(days=1):
        return None

    return [created + timedelta(days=offset) for offset in range(1, (latest - created).days)]
