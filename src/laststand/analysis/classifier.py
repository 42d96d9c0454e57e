"""
Tri-state activity classification of buckets.

Classification enum:
  ACTIVE: the bucket reported at least `active_threshold` steps
  INACTIVE: the bucket reported fewer steps (including an observed zero)
  UNKNOWN: nothing was reported for the bucket

"No data" and "zero steps" are never folded into one boolean. The threshold
is a product decision (values between 8 and 30 steps per bucket have all been
used), so it is always passed in rather than fixed here.
"""
from enum import Enum
from typing import Iterable, List, Tuple

from laststand.analysis.buckets import Bucket


class Classification(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


def classify(bucket: Bucket, active_threshold: int) -> Classification:
    """
    Classify one bucket.

    Total over all buckets and monotonic in count: for a fixed threshold, a
    higher count never yields a "less active" label.
    """
    if not bucket.has_data:
        return Classification.UNKNOWN
    if bucket.count >= active_threshold:
        return Classification.ACTIVE
    return Classification.INACTIVE


class ActivityClassifier:
    """classify() bound to one configured threshold."""

    def __init__(self, active_threshold: int):
        if active_threshold < 0:
            raise ValueError(f"active_threshold must be >= 0, got {active_threshold}")
        self.active_threshold = active_threshold

    def classify(self, bucket: Bucket) -> Classification:
        return classify(bucket, self.active_threshold)

    def classify_all(self, buckets: Iterable[Bucket]) -> List[Tuple[Bucket, Classification]]:
        return [(b, self.classify(b)) for b in buckets]
