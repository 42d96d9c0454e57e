"""Tests for resolve_last_activity and seconds_since."""
from datetime import timedelta
from typing import List

from factories import at
from laststand.analysis.buckets import Bucket
from laststand.analysis.last_activity import resolve_last_activity, seconds_since

FIVE_MIN = timedelta(minutes=5)
FRESH = timedelta(seconds=900)


def _buckets(*counts_by_minute) -> List[Bucket]:
    """Buckets at 09:MM with the given counts; None means no data."""
    return [
        Bucket(at(9, minute), FIVE_MIN, count or 0, count is not None)
        for minute, count in counts_by_minute
    ]


class TestResolveLastActivity:
    def test_returns_most_recent_qualifying_bucket(self):
        buckets = _buckets((0, 30), (5, 0), (10, 40))
        assert resolve_last_activity(buckets, at(9, 12), 20, FRESH) == at(9, 10)

    def test_skips_recent_bucket_below_threshold(self):
        buckets = _buckets((0, 30), (5, 0), (10, 5))
        assert resolve_last_activity(buckets, at(9, 12), 20, FRESH) == at(9, 0)

    def test_none_when_all_below_threshold(self):
        buckets = _buckets((0, 3), (5, 0), (10, 19))
        assert resolve_last_activity(buckets, at(9, 12), 20, FRESH) is None

    def test_none_when_all_stale(self):
        buckets = _buckets((0, 300), (5, 300), (10, 300))
        # Latest end is 09:15; 16 minutes later it is past the 15 minute window
        assert resolve_last_activity(buckets, at(9, 31), 20, FRESH) is None

    def test_end_not_start_is_compared(self):
        buckets = _buckets((0, 30))
        # start is 15m30s ago but end only 10m30s ago
        assert resolve_last_activity(buckets, at(9, 15) + timedelta(seconds=30), 20, FRESH) == at(9, 0)

    def test_freshness_boundary_is_inclusive(self):
        buckets = _buckets((0, 30))
        assert resolve_last_activity(buckets, at(9, 20), 20, FRESH) == at(9, 0)
        assert resolve_last_activity(buckets, at(9, 20) + timedelta(seconds=1), 20, FRESH) is None

    def test_no_data_bucket_never_qualifies(self):
        buckets = _buckets((0, None), (5, None))
        assert resolve_last_activity(buckets, at(9, 6), 0, FRESH) is None

    def test_shorter_window_is_stricter(self):
        buckets = _buckets((0, 30))
        now = at(9, 10)
        assert resolve_last_activity(buckets, now, 20, timedelta(seconds=900)) == at(9, 0)
        assert resolve_last_activity(buckets, now, 20, timedelta(seconds=240)) is None

    def test_empty_buckets(self):
        assert resolve_last_activity([], at(9), 20, FRESH) is None


class TestElapsedHelpers:
    def test_seconds_since(self):
        assert seconds_since(at(9), at(9, 2)) == 120

    def test_seconds_since_none(self):
        assert seconds_since(None, at(9)) is None

    def test_seconds_since_never_negative(self):
        assert seconds_since(at(9, 5), at(9)) == 0
