"""
Per-hour rollups: active minutes per work hour, and the 24-hour stand chart.

HourlyActivity is built from the same minute-level classifications used for
streak detection, so "active hours" and "longest sedentary period" always
agree with each other.

StandHour is built from STAND_HOUR category samples: an hour counts as stood
when any "stood" sample starts inside it.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from laststand.analysis.classifier import Classification
from laststand.analysis.samples import Sample, SampleKind
from laststand.analysis.sedentary import WorkWindow

HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class HourlyActivity:
    hour: int
    active_minutes: int
    total_minutes: int  # elapsed minutes only; a future hour has 0

    @property
    def activity_ratio(self) -> float:
        if self.total_minutes == 0:
            return 0.0
        return self.active_minutes / self.total_minutes


@dataclass(frozen=True)
class StandHour:
    hour: int
    start: datetime
    did_stand: bool


def hourly_activity(
    minutes: Sequence[Tuple[datetime, Classification]],
    work_window: WorkWindow,
) -> List[HourlyActivity]:
    """One HourlyActivity per hour of the work window, in hour order."""
    active: Dict[int, int] = {h: 0 for h in work_window.hours}
    total: Dict[int, int] = {h: 0 for h in work_window.hours}
    for moment, label in minutes:
        if not work_window.contains(moment):
            continue
        total[moment.hour] += 1
        if label == Classification.ACTIVE:
            active[moment.hour] += 1
    return [HourlyActivity(h, active[h], total[h]) for h in work_window.hours]


def active_hour_count(hours: Iterable[HourlyActivity]) -> int:
    return sum(1 for h in hours if h.active_minutes > 0)


def _stood_samples(samples: Iterable[Sample], now: datetime) -> List[Sample]:
    return [
        s for s in samples
        if s.kind == SampleKind.STAND_HOUR and s.stood and s.end <= now
    ]


def stand_hours(samples: Iterable[Sample], day_start: datetime, now: datetime) -> List[StandHour]:
    """
    24 StandHour slots for the day starting at day_start.

    Samples ending after now are ignored, like everywhere else in the engine.
    """
    stood = _stood_samples(samples, now)
    result = []
    for hour in range(24):
        hour_start = day_start + hour * HOUR
        hour_end = hour_start + HOUR
        did_stand = any(hour_start <= s.start < hour_end for s in stood)
        result.append(StandHour(hour, hour_start, did_stand))
    return result


def last_stand(samples: Iterable[Sample], now: datetime) -> Optional[datetime]:
    """End of the most recent "stood" sample that is not in the future."""
    ends = [s.end for s in _stood_samples(samples, now)]
    return max(ends) if ends else None
