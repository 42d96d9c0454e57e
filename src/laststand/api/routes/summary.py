"""Activity summary routes."""
import logging
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from laststand.analysis.buckets import start_of_day
from laststand.analysis.samples import Sample, SampleKind, mixes_timezone_awareness
from laststand.analysis.sedentary import WorkWindow
from laststand.analysis.timeline import EngineConfig, build_summary
from laststand.config import Settings, get_settings
from laststand.garmin.auth import GarminSession, NoSessionError, SessionExpiredError
from laststand.garmin.client import GarminClient
from laststand.garmin.source import GarminSampleSource
from laststand.sources.base import SampleSource, fetch_day_samples

logger = logging.getLogger(__name__)

router = APIRouter()


class SampleIn(BaseModel):
    start: datetime
    end: datetime
    value: int = Field(ge=0)
    kind: SampleKind = SampleKind.STEPS


class ConfigIn(BaseModel):
    bucket_width_minutes: Optional[int] = Field(default=None, gt=0)
    active_threshold: Optional[int] = Field(default=None, ge=0)
    freshness_window_seconds: Optional[int] = Field(default=None, ge=0)
    work_start_hour: Optional[int] = Field(default=None, ge=0, le=23)
    work_end_hour: Optional[int] = Field(default=None, ge=1, le=24)
    minute_active_threshold: Optional[int] = Field(default=None, ge=0)


class SummaryRequest(BaseModel):
    now: datetime
    samples: List[SampleIn] = []
    config: Optional[ConfigIn] = None


def _engine_config(settings: Settings, overrides: Optional[ConfigIn]) -> EngineConfig:
    values = settings.model_dump()
    if overrides is not None:
        values.update(overrides.model_dump(exclude_none=True))
    return EngineConfig(
        bucket_width_minutes=values["bucket_width_minutes"],
        active_threshold=values["active_threshold"],
        freshness_window_seconds=values["freshness_window_seconds"],
        work_window=WorkWindow(values["work_start_hour"], values["work_end_hour"]),
        minute_active_threshold=values["minute_active_threshold"],
    )


@router.post("/")
def create_summary(request: SummaryRequest, settings: Settings = Depends(get_settings)):
    """Build a summary from caller-supplied samples and reference time."""
    samples = [Sample(s.start, s.end, s.value, s.kind) for s in request.samples]
    if mixes_timezone_awareness(samples, request.now):
        raise HTTPException(
            status_code=422,
            detail="Sample timestamps and now must all carry a UTC offset, or none may",
        )

    try:
        config = _engine_config(settings, request.config)
        summary = build_summary(samples, request.now, config)
    except ValueError as exc:  # includes InvalidWindow
        raise HTTPException(status_code=422, detail=str(exc))

    return summary.to_dict()


async def get_sample_source(settings: Settings = Depends(get_settings)) -> SampleSource:
    """FastAPI dependency: a connected Garmin sample source."""
    client = GarminClient(GarminSession(settings.garmin_tokens_dir))
    try:
        await client.connect()
    except (NoSessionError, SessionExpiredError) as exc:
        logger.warning("Garmin unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc))
    return GarminSampleSource(client, ZoneInfo(settings.timezone))


@router.get("/today")
async def today_summary(
    source: SampleSource = Depends(get_sample_source),
    settings: Settings = Depends(get_settings),
):
    """Fetch today's samples from the configured source and summarise them."""
    now = datetime.now(ZoneInfo(settings.timezone))
    samples = await fetch_day_samples(source, start_of_day(now), now)
    summary = build_summary(samples, now, EngineConfig.from_settings(settings))
    return summary.to_dict()
