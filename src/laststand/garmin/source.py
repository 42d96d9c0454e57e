"""SampleSource backed by Garmin Connect."""
import logging
from datetime import datetime, timedelta, tzinfo
from typing import List

from laststand.analysis.samples import Sample, SampleKind
from laststand.garmin.client import GarminClient
from laststand.garmin.normalizer import normalize_steps_interval, split_into_minutes

logger = logging.getLogger(__name__)


class GarminSampleSource:
    """
    Serves STEPS samples from get_steps_data(), one request per calendar day
    touched by the requested range.

    Intervals that end after the requested range are still being counted by
    the watch and are dropped before any per-minute split.

    Garmin has no stand-hour category, so STAND_HOUR requests return [].
    """

    def __init__(self, client: GarminClient, tz: tzinfo, per_minute: bool = True):
        """
        Args:
            client: a connected GarminClient (or AsyncMock in tests).
            tz: local zone for converting Garmin's GMT timestamps.
            per_minute: spread each 15-minute interval over its minutes.
        """
        self.client = client
        self.tz = tz
        self.per_minute = per_minute

    async def fetch(self, kind: SampleKind, start: datetime, end: datetime) -> List[Sample]:
        if kind != SampleKind.STEPS:
            logger.debug("Garmin has no %s samples; returning none", kind.value)
            return []

        samples: List[Sample] = []
        skipped = 0
        day = start.date()
        while day <= end.date():
            for raw in await self.client.get_steps_data(day):
                sample = normalize_steps_interval(raw, self.tz)
                if not (start <= sample.start < end):
                    continue
                if sample.end > end:
                    # Interval still in progress; its total is provisional
                    skipped += 1
                    continue
                if self.per_minute:
                    samples.extend(split_into_minutes(sample))
                else:
                    samples.append(sample)
            day += timedelta(days=1)

        if skipped:
            logger.debug("Skipped %d in-progress Garmin interval(s) ending after %s", skipped, end.isoformat())
        logger.info(
            "Fetched %d Garmin step sample(s) for %s to %s",
            len(samples), start.isoformat(), end.isoformat(),
        )
        return samples
