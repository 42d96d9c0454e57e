"""
ActivitySummary assembler.

Runs every analysis step against one captured `now`:

  samples ─► bucket_samples ─► ActivityClassifier ─► timeline
                  │                                    │
                  │                                    ├─► resolve_last_activity
                  └─► minute_classifications ─► longest_sedentary_streak
                                               └─► hourly_activity

STAND_HOUR samples bypass bucketing and feed only the 24-hour stand chart.

build_summary() is pure: the same samples and `now` always give an equal
ActivitySummary. Nothing in here reads the wall clock; callers capture `now`
once and pass it down.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from laststand.analysis.buckets import Bucket, bucket_samples, start_of_day
from laststand.analysis.classifier import ActivityClassifier, Classification
from laststand.analysis.hourly import (
    HourlyActivity,
    StandHour,
    active_hour_count,
    hourly_activity,
    last_stand,
    stand_hours,
)
from laststand.analysis.last_activity import resolve_last_activity, seconds_since
from laststand.analysis.samples import Sample, SampleKind
from laststand.analysis.sedentary import (
    WorkWindow,
    longest_sedentary_streak,
    minute_classifications,
)

logger = logging.getLogger(__name__)

TimelineEntry = Tuple[Bucket, Classification]


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunables for one summary build.

    Defaults are the steady-state values of the latest app revision; earlier
    revisions used thresholds of 8 and 30 steps and a 300 s freshness window.
    """

    bucket_width_minutes: int = 5
    active_threshold: int = 20
    freshness_window_seconds: int = 900
    work_window: WorkWindow = field(default_factory=WorkWindow)
    minute_active_threshold: int = 1

    def __post_init__(self):
        if self.bucket_width_minutes <= 0:
            raise ValueError(f"bucket_width_minutes must be > 0, got {self.bucket_width_minutes}")
        if self.active_threshold < 0:
            raise ValueError(f"active_threshold must be >= 0, got {self.active_threshold}")
        if self.freshness_window_seconds < 0:
            raise ValueError(
                f"freshness_window_seconds must be >= 0, got {self.freshness_window_seconds}"
            )
        if self.minute_active_threshold < 0:
            raise ValueError(
                f"minute_active_threshold must be >= 0, got {self.minute_active_threshold}"
            )

    @property
    def bucket_width(self) -> timedelta:
        return timedelta(minutes=self.bucket_width_minutes)

    @property
    def freshness_window(self) -> timedelta:
        return timedelta(seconds=self.freshness_window_seconds)

    @classmethod
    def from_settings(cls, settings) -> "EngineConfig":
        """Build from a laststand.config.Settings (or anything with the same attrs)."""
        return cls(
            bucket_width_minutes=settings.bucket_width_minutes,
            active_threshold=settings.active_threshold,
            freshness_window_seconds=settings.freshness_window_seconds,
            work_window=WorkWindow(settings.work_start_hour, settings.work_end_hour),
            minute_active_threshold=settings.minute_active_threshold,
        )


@dataclass(frozen=True)
class ActivitySummary:
    """
    Complete activity picture for one day up to `now`.

    Produced by build_summary() and consumed by the presentation layer
    (HTTP route, CLI), which only renders it.
    """
    now: datetime
    last_activity_at: Optional[datetime]
    longest_sedentary_streak_minutes: int
    active_bucket_count: int
    total_bucket_count: int
    timeline: List[TimelineEntry]

    active_hour_count: int = 0
    work_hour_count: int = 0
    hourly: List[HourlyActivity] = field(default_factory=list)
    stand_hours: List[StandHour] = field(default_factory=list)
    last_stand_at: Optional[datetime] = None
    seconds_since_last_activity: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready dict (datetimes as ISO-8601 strings)."""
        return {
            "now": self.now.isoformat(),
            "last_activity_at": _iso(self.last_activity_at),
            "seconds_since_last_activity": self.seconds_since_last_activity,
            "longest_sedentary_streak_minutes": self.longest_sedentary_streak_minutes,
            "active_bucket_count": self.active_bucket_count,
            "total_bucket_count": self.total_bucket_count,
            "active_hour_count": self.active_hour_count,
            "work_hour_count": self.work_hour_count,
            "last_stand_at": _iso(self.last_stand_at),
            "timeline": [
                {
                    "start": bucket.start.isoformat(),
                    "end": bucket.end.isoformat(),
                    "count": bucket.count,
                    "has_data": bucket.has_data,
                    "classification": label.value,
                }
                for bucket, label in self.timeline
            ],
            "hourly": [
                {
                    "hour": h.hour,
                    "active_minutes": h.active_minutes,
                    "total_minutes": h.total_minutes,
                    "activity_ratio": round(h.activity_ratio, 4),
                }
                for h in self.hourly
            ],
            "stand_hours": [
                {"hour": s.hour, "start": s.start.isoformat(), "did_stand": s.did_stand}
                for s in self.stand_hours
            ],
        }


def _iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment is not None else None


def build_summary(
    samples: Sequence[Sample],
    now: datetime,
    config: Optional[EngineConfig] = None,
) -> ActivitySummary:
    """
    Build the ActivitySummary for now's calendar day.

    Args:
        samples: step and stand-hour samples for the day, any order.
        now: the single reference clock for every step.
        config: tunables; EngineConfig() defaults when omitted.

    Returns:
        ActivitySummary. Empty input gives an all-UNKNOWN timeline and
        last_activity_at=None rather than an error.
    """
    config = config or EngineConfig()
    day_start = start_of_day(now)
    steps = [s for s in samples if s.kind == SampleKind.STEPS]

    # ── Bucketed timeline ─────────────────────────────────────────────────────
    buckets = list(bucket_samples(steps, day_start, now, config.bucket_width, now=now).values())
    classifier = ActivityClassifier(config.active_threshold)
    timeline = classifier.classify_all(buckets)
    active_buckets = sum(1 for _, label in timeline if label == Classification.ACTIVE)

    last_activity_at = resolve_last_activity(
        buckets, now, config.active_threshold, config.freshness_window
    )

    # ── Minute-level streak + hourly rollup ───────────────────────────────────
    minutes = minute_classifications(steps, day_start, now, config.minute_active_threshold)
    streak = longest_sedentary_streak(minutes, config.work_window)
    hourly = hourly_activity(minutes, config.work_window)

    summary = ActivitySummary(
        now=now,
        last_activity_at=last_activity_at,
        longest_sedentary_streak_minutes=streak,
        active_bucket_count=active_buckets,
        total_bucket_count=len(buckets),
        timeline=timeline,
        active_hour_count=active_hour_count(hourly),
        work_hour_count=len(hourly),
        hourly=hourly,
        stand_hours=stand_hours(samples, day_start, now),
        last_stand_at=last_stand(samples, now),
        seconds_since_last_activity=seconds_since(last_activity_at, now),
    )

    logger.info(
        "Summary at %s: %d/%d active buckets, last activity %s, longest sedentary %d min",
        now.isoformat(),
        active_buckets,
        len(buckets),
        _iso(last_activity_at) or "none",
        streak,
    )
    return summary
