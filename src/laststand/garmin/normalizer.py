"""
Garmin API response normalizer.

Converts raw dicts from garminconnect into Sample instances. No network
access here; GarminSampleSource does the fetching.

get_steps_data() returns one dict per fixed 15-minute interval:

    {
        "startGMT": "2024-01-01T09:00:00.0",
        "endGMT":   "2024-01-01T09:15:00.0",
        "steps": 412,
        "pushes": 0,
        "primaryActivityLevel": "active",
        "activityLevelConstant": true
    }

Times are UTC without an offset suffix; they are converted to the
configured local zone so day boundaries and work hours line up with the
wearer's clock.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List

from laststand.analysis.samples import Sample, SampleKind

_MINUTE = timedelta(minutes=1)


def _parse_garmin_gmt(s: str, tz: tzinfo) -> datetime:
    """Parse a Garmin GMT string ("YYYY-MM-DDTHH:MM:SS.f" or space-separated)."""
    s = s.strip().replace(" ", "T")
    base = s.split(".")[0]  # drop fractional seconds
    naive = datetime.strptime(base, "%Y-%m-%dT%H:%M:%S")
    return naive.replace(tzinfo=timezone.utc).astimezone(tz)


def normalize_steps_interval(raw: Dict[str, Any], tz: tzinfo) -> Sample:
    """
    Normalize one get_steps_data() interval into a STEPS Sample.

    Raises:
        ValueError: if startGMT, endGMT or steps is missing.
    """
    try:
        start = _parse_garmin_gmt(raw["startGMT"], tz)
        end = _parse_garmin_gmt(raw["endGMT"], tz)
        steps = raw["steps"]
    except KeyError as exc:
        raise ValueError(f"Garmin steps interval missing field {exc}: {raw!r}") from exc
    if steps is None:
        raise ValueError(f"Garmin steps interval has null steps: {raw!r}")
    return Sample(start=start, end=end, value=int(steps), kind=SampleKind.STEPS)


def split_into_minutes(sample: Sample) -> List[Sample]:
    """
    Spread an interval sample evenly over its whole minutes.

    Garmin only reports 15-minute totals. Left as one sample, all steps would
    land in the interval's first minute and the other 14 would look like "no
    data". The remainder of the integer division goes to the earliest
    minutes, so the total is preserved. A sample shorter than a minute is
    returned unchanged.
    """
    minutes = int((sample.end - sample.start) // _MINUTE)
    if minutes <= 1:
        return [sample]
    per_minute, remainder = divmod(sample.value, minutes)
    return [
        Sample(
            start=sample.start + i * _MINUTE,
            end=sample.start + (i + 1) * _MINUTE,
            value=per_minute + (1 if i < remainder else 0),
            kind=sample.kind,
        )
        for i in range(minutes)
    ]
