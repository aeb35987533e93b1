"""
Week boundaries for the "current" shopping list.

Weeks start on Sunday at local midnight.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def start_of_week(moment: Optional[datetime] = None) -> datetime:
    """
    Most recent Sunday at 00:00:00.000 that is on or before ``moment``.

    Naive datetimes are local time and stay naive; aware datetimes keep
    their tzinfo. Applying it to its own result returns the same value.
    """
    if moment is None:
        moment = datetime.now()
    # Monday is 0 in Python; days since Sunday is one more, modulo 7
    days_since_sunday = (moment.weekday() + 1) % 7
    sunday = moment - timedelta(days=days_since_sunday)
    return sunday.replace(hour=0, minute=0, second=0, microsecond=0)


def to_wire(moment: datetime) -> str:
    """ISO-8601 in UTC; naive values are taken as local time."""
    return moment.astimezone(timezone.utc).isoformat()
