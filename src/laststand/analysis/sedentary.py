"""
Sedentary streak detection within a work-hours window.

The scan runs at 1-minute resolution regardless of the bucket width used for
the timeline:
  1. Build one classification per elapsed minute of the day
     (minute_classifications).
  2. Skip minutes whose hour-of-day is outside the work window. Skipped
     minutes neither break nor extend a streak.
  3. UNKNOWN (no data) and INACTIVE (zero steps) both count as sedentary;
     only ACTIVE resets the running streak.
  4. Report the longest run seen, in minutes.

The work window is inclusive-start, exclusive-end: WorkWindow(9, 17) covers
09:00 through 16:59.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence, Tuple

from laststand.analysis.buckets import bucket_samples
from laststand.analysis.classifier import ActivityClassifier, Classification
from laststand.analysis.samples import Sample, SampleKind

MINUTE = timedelta(minutes=1)
MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class WorkWindow:
    """Hour-of-day range [start_hour, end_hour) in which streaks are measured."""

    start_hour: int = 9
    end_hour: int = 17

    def __post_init__(self):
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError(
                f"Work window must satisfy 0 <= start < end <= 24, "
                f"got ({self.start_hour}, {self.end_hour})"
            )

    def contains(self, moment: datetime) -> bool:
        return self.start_hour <= moment.hour < self.end_hour

    @property
    def hours(self) -> List[int]:
        return list(range(self.start_hour, self.end_hour))


def minute_classifications(
    samples: Iterable[Sample],
    day_start: datetime,
    now: datetime,
    minute_threshold: int = 1,
) -> List[Tuple[datetime, Classification]]:
    """
    Classify every elapsed minute of the day in [day_start, now).

    The range is clamped to one day. Only STEPS samples are considered.
    With the default threshold of 1, any recorded step makes a minute active.
    """
    end = min(now, day_start + MINUTES_PER_DAY * MINUTE)
    if end < day_start:
        end = day_start
    steps = [s for s in samples if s.kind == SampleKind.STEPS]
    buckets = bucket_samples(steps, day_start, end, MINUTE, now=now)
    classifier = ActivityClassifier(minute_threshold)
    return [(start, classifier.classify(b)) for start, b in buckets.items()]


def longest_sedentary_streak(
    classifications: Sequence[Tuple[datetime, Classification]],
    work_window: WorkWindow,
) -> int:
    """
    Longest contiguous run of non-active minutes inside the work window.

    Args:
        classifications: (minute start, label) pairs in ascending order.
        work_window: hour range to analyse.

    Returns:
        Streak length in minutes; 0 if no in-window minute is sedentary.
    """
    current = 0
    longest = 0
    for moment, label in classifications:
        if not work_window.contains(moment):
            continue
        if label == Classification.ACTIVE:
            current = 0
            continue
        current += 1
        if current > longest:
            longest = current
    return longest
