"""
Sample dataclass and conversion from raw record dicts.

Sample is the universal in-memory representation consumed by all analysis
modules. It is a plain frozen dataclass with no I/O or framework dependencies.
Analysis functions take List[Sample] and return pure results.

Two kinds of sample exist:
  STEPS       value is a step count for the [start, end) interval
  STAND_HOUR  value is 1 ("stood") or 0 ("idle") for the hour the sample covers
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List


class SampleKind(str, Enum):
    STEPS = "steps"
    STAND_HOUR = "stand_hour"


STOOD = 1
IDLE = 0

_STAND_VALUES = {"stood": STOOD, "idle": IDLE}


@dataclass(frozen=True)
class Sample:
    """
    One observation reported by a health-data source.

    The engine only ever reads these; sources build them.
    """

    start: datetime
    end: datetime
    value: int
    kind: SampleKind = SampleKind.STEPS

    @property
    def stood(self) -> bool:
        return self.kind == SampleKind.STAND_HOUR and self.value == STOOD


def _parse_timestamp(raw: Any, field_name: str) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid {field_name} timestamp: {raw!r}") from exc
    raise ValueError(f"Missing or non-timestamp {field_name}: {raw!r}")


def _parse_value(record: Dict[str, Any], kind: SampleKind) -> int:
    raw = record.get("value", record.get("steps"))
    if raw is None:
        raise ValueError(f"Sample record has no value: {record!r}")
    if kind == SampleKind.STAND_HOUR and isinstance(raw, str):
        try:
            return _STAND_VALUES[raw.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown stand-hour value: {raw!r}") from exc
    value = int(raw)
    if value < 0:
        raise ValueError(f"Negative sample value: {value}")
    return value


def record_to_sample(record: Dict[str, Any]) -> Sample:
    """
    Convert one raw record dict into a Sample.

    Accepted keys:
      start, end   ISO-8601 strings or datetime objects (required)
      value|steps  non-negative int; for stand hours also "stood" / "idle"
      kind         "steps" (default) or "stand_hour"

    Raises:
        ValueError: if a required field is missing or malformed, or if the
            sample ends before it starts.
    """
    try:
        kind = SampleKind(record.get("kind", SampleKind.STEPS.value))
    except ValueError as exc:
        raise ValueError(f"Unknown sample kind: {record.get('kind')!r}") from exc

    start = _parse_timestamp(record.get("start"), "start")
    end = _parse_timestamp(record.get("end"), "end")
    if end < start:
        raise ValueError(f"Sample ends before it starts: {start} > {end}")

    return Sample(start=start, end=end, value=_parse_value(record, kind), kind=kind)


def records_to_samples(records: Iterable[Dict[str, Any]]) -> List[Sample]:
    """
    Convert a list of raw record dicts (from a JSON fixture, an HTTP body or a
    source normalizer) into Sample instances, preserving order.
    """
    return [record_to_sample(r) for r in records]


def _is_aware(moment: datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None


def mixes_timezone_awareness(samples: Iterable[Sample], now: datetime) -> bool:
    """
    True if any sample timestamp differs from `now` in carrying a UTC offset.

    Naive and offset-aware datetimes cannot be compared, so such input would
    fail deep inside bucketing.
    """
    aware = _is_aware(now)
    return any(_is_aware(s.start) != aware or _is_aware(s.end) != aware for s in samples)
