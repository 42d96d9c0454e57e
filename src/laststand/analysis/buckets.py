"""
Fixed-width interval bucketing of raw samples.

A day (or any [window_start, window_end) range) is split into contiguous,
non-overlapping slots of `width`. Each sample is attributed to the slot that
contains its start timestamp.

Two empty states are kept apart on purpose:
  has_data=False, count=0   nothing was reported for the slot
  has_data=True,  count=0   the source reported the slot and it was zero

Samples that end after `now` are dropped before attribution. Platform
sources emit provisional records for the interval in progress, and clock
skew can push a record past the present; neither may influence
classification.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

from laststand.analysis.samples import Sample

logger = logging.getLogger(__name__)


class InvalidWindow(ValueError):
    """Raised for a reversed time window or a non-positive bucket width."""


@dataclass(frozen=True)
class Bucket:
    """One [start, start + width) slot with the summed count of its samples."""

    start: datetime
    width: timedelta
    count: int = 0
    has_data: bool = False

    @property
    def end(self) -> datetime:
        return self.start + self.width


def start_of_day(moment: datetime) -> datetime:
    """Midnight of moment's calendar day (tzinfo is preserved)."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def bucket_samples(
    samples: Iterable[Sample],
    window_start: datetime,
    window_end: datetime,
    width: timedelta,
    now: Optional[datetime] = None,
) -> Dict[datetime, Bucket]:
    """
    Assign samples to fixed-width buckets covering [window_start, window_end).

    Args:
        samples: raw samples, any order. Only their start, end and value are read.
        window_start: start of the first bucket.
        window_end: exclusive end of the covered range (normally "now").
            A slot starting at or after window_end is never created; the last
            slot may extend past it when width does not divide the window.
        width: bucket width.
        now: reference clock for future-sample exclusion. Defaults to window_end.

    Returns:
        Dict keyed by bucket start, in ascending start order.

    Raises:
        InvalidWindow: if window_start > window_end or width <= 0.
    """
    if width <= timedelta(0):
        raise InvalidWindow(f"Bucket width must be positive, got {width}")
    if window_start > window_end:
        raise InvalidWindow(
            f"Window start {window_start.isoformat()} is after end {window_end.isoformat()}"
        )
    if now is None:
        now = window_end

    counts: Dict[int, int] = {}
    discarded = 0
    for sample in samples:
        if sample.end > now:
            discarded += 1
            continue
        if not (window_start <= sample.start < window_end):
            continue
        index = (sample.start - window_start) // width
        counts[index] = counts.get(index, 0) + sample.value

    if discarded:
        logger.debug("Discarded %d sample(s) ending after %s", discarded, now.isoformat())

    buckets: Dict[datetime, Bucket] = {}
    index = 0
    slot_start = window_start
    while slot_start < window_end:
        if index in counts:
            buckets[slot_start] = Bucket(slot_start, width, counts[index], True)
        else:
            buckets[slot_start] = Bucket(slot_start, width)
        index += 1
        slot_start = window_start + index * width

    return buckets
