"""
Sample source protocol and the day fetch helper.

A source answers one question: "give me all samples of kind K between A and
B". The engine never calls a source itself; adapters (the HTTP route, the
CLI) fetch first and hand build_summary() a plain list.
"""
import asyncio
from datetime import datetime
from typing import List, Protocol

from laststand.analysis.samples import Sample, SampleKind


class SampleSource(Protocol):
    async def fetch(self, kind: SampleKind, start: datetime, end: datetime) -> List[Sample]:
        ...


async def fetch_day_samples(source: SampleSource, start: datetime, end: datetime) -> List[Sample]:
    """Fetch step and stand-hour samples for [start, end) concurrently and merge them."""
    steps, stands = await asyncio.gather(
        source.fetch(SampleKind.STEPS, start, end),
        source.fetch(SampleKind.STAND_HOUR, start, end),
    )
    return list(steps) + list(stands)
