"""
Most-recent-activity resolution.

The "last stand" is the start of the newest bucket that both reached the step
threshold and is still fresh: its END is no more than `freshness_window`
before now. Comparing the bucket end (not start) means a 5-minute bucket that
just closed counts as current, while one busy bucket from hours ago does not
keep reporting the person as active.

The scan runs newest-first and returns on the first match, so the usual case
(recent activity exists) touches only a handful of buckets.
"""
from datetime import datetime, timedelta
from typing import Optional, Sequence

from laststand.analysis.buckets import Bucket


def resolve_last_activity(
    buckets: Sequence[Bucket],
    now: datetime,
    active_threshold: int,
    freshness_window: timedelta,
) -> Optional[datetime]:
    """
    Return the start of the most recent fresh, above-threshold bucket.

    Args:
        buckets: buckets in ascending start order.
        now: reference clock.
        active_threshold: minimum step count for a bucket to qualify.
        freshness_window: maximum allowed now - bucket.end.

    Returns:
        The qualifying bucket's start, or None when no bucket qualifies.
    """
    for bucket in reversed(buckets):
        age = now - bucket.end
        if age > freshness_window:
            # Ends only get older from here on.
            break
        if bucket.has_data and bucket.count >= active_threshold:
            return bucket.start
    return None


def seconds_since(moment: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole seconds from moment to now, floored at 0. None if moment is None."""
    if moment is None:
        return None
    return max(int((now - moment).total_seconds()), 0)
