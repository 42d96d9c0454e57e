"""Tests for the sample sources and the concurrent day fetch."""
import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from laststand.analysis.samples import Sample, SampleKind
from laststand.analysis.timeline import build_summary
from laststand.garmin.source import GarminSampleSource
from laststand.sources.base import fetch_day_samples
from laststand.sources.json_file import JsonFileSampleSource, SampleFileError, load_samples

FIXTURES = Path(__file__).parent.parent / "fixtures"
UTC = timezone.utc


# ─── JSON file source ─────────────────────────────────────────────────────────

class TestLoadSamples:
    def test_loads_fixture(self):
        samples = load_samples(FIXTURES / "sample_day.json")
        assert len(samples) == 6
        assert sum(1 for s in samples if s.kind == SampleKind.STAND_HOUR) == 2

    def test_accepts_wrapped_object(self, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"samples": [
            {"start": "2024-01-01T09:00:00", "end": "2024-01-01T09:01:00", "value": 3},
        ]}))
        assert len(load_samples(path)) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SampleFileError, match="not found"):
            load_samples(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SampleFileError):
            load_samples(path)

    def test_malformed_record(self, tmp_path):
        path = tmp_path / "bad_record.json"
        path.write_text(json.dumps([{"start": "2024-01-01T09:00:00"}]))
        with pytest.raises(SampleFileError):
            load_samples(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42")
        with pytest.raises(SampleFileError):
            load_samples(path)


class TestJsonFileSampleSource:
    async def test_filters_by_kind_and_range(self):
        source = JsonFileSampleSource(FIXTURES / "sample_day.json")
        result = await source.fetch(
            SampleKind.STEPS, datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10)
        )
        assert [s.value for s in result] == [0, 35, 12]

    async def test_stand_hours(self):
        source = JsonFileSampleSource(FIXTURES / "sample_day.json")
        result = await source.fetch(
            SampleKind.STAND_HOUR, datetime(2024, 1, 1), datetime(2024, 1, 2)
        )
        assert [s.stood for s in result] == [True, False]

    async def test_reads_file_once(self, tmp_path):
        path = tmp_path / "day.json"
        path.write_text(json.dumps([
            {"start": "2024-01-01T09:00:00", "end": "2024-01-01T09:01:00", "value": 3},
        ]))
        source = JsonFileSampleSource(path)
        assert len(source.load()) == 1
        path.unlink()
        result = await source.fetch(SampleKind.STEPS, datetime(2024, 1, 1), datetime(2024, 1, 2))
        assert [s.value for s in result] == [3]

    def test_load_raises_for_missing_file(self, tmp_path):
        with pytest.raises(SampleFileError):
            JsonFileSampleSource(tmp_path / "nope.json").load()


# ─── fetch_day_samples ────────────────────────────────────────────────────────

class TestFetchDaySamples:
    async def test_merges_both_kinds(self):
        step = Sample(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 9, 1), 10)
        stood = Sample(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10), 1, SampleKind.STAND_HOUR)
        source = AsyncMock()
        source.fetch.side_effect = lambda kind, start, end: [step] if kind == SampleKind.STEPS else [stood]

        result = await fetch_day_samples(source, datetime(2024, 1, 1), datetime(2024, 1, 1, 12))

        assert result == [step, stood]
        kinds = [c.args[0] for c in source.fetch.call_args_list]
        assert sorted(k.value for k in kinds) == ["stand_hour", "steps"]

    async def test_empty_source(self):
        source = AsyncMock()
        source.fetch.return_value = []
        assert await fetch_day_samples(source, datetime(2024, 1, 1), datetime(2024, 1, 1, 12)) == []


# ─── Garmin source ────────────────────────────────────────────────────────────

@pytest.fixture
def garmin_client():
    client = AsyncMock()
    client.get_steps_data.return_value = json.loads((FIXTURES / "garmin_steps_data.json").read_text())
    return client


class TestGarminSampleSource:
    async def test_steps_split_per_minute(self, garmin_client):
        source = GarminSampleSource(garmin_client, UTC)
        result = await source.fetch(
            SampleKind.STEPS,
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 1, 1, 10, 15, tzinfo=UTC),
        )
        # 6 intervals x 15 minutes
        assert len(result) == 90
        assert sum(s.value for s in result) == 452 + 31 + 1210

    async def test_interval_samples_when_not_splitting(self, garmin_client):
        source = GarminSampleSource(garmin_client, UTC, per_minute=False)
        result = await source.fetch(
            SampleKind.STEPS,
            datetime(2024, 1, 1, 9, tzinfo=UTC),
            datetime(2024, 1, 1, 12, tzinfo=UTC),
        )
        assert [s.value for s in result] == [0, 452, 31, 0, 1210]

    async def test_one_request_per_day(self, garmin_client):
        source = GarminSampleSource(garmin_client, UTC)
        await source.fetch(
            SampleKind.STEPS,
            datetime(2024, 1, 1, 22, tzinfo=UTC),
            datetime(2024, 1, 2, 2, tzinfo=UTC),
        )
        days = [c.args[0].isoformat() for c in garmin_client.get_steps_data.call_args_list]
        assert days == ["2024-01-01", "2024-01-02"]

    async def test_stand_hours_unsupported(self, garmin_client):
        source = GarminSampleSource(garmin_client, UTC)
        result = await source.fetch(
            SampleKind.STAND_HOUR,
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 1, 2, tzinfo=UTC),
        )
        assert result == []
        garmin_client.get_steps_data.assert_not_called()

    async def test_drops_interval_still_in_progress(self, garmin_client):
        source = GarminSampleSource(garmin_client, UTC)
        result = await source.fetch(
            SampleKind.STEPS,
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 1, 1, 10, 7, tzinfo=UTC),
        )
        # 10:00-10:15 has not finished; the five complete intervals remain
        assert len(result) == 75
        assert max(s.end for s in result) == datetime(2024, 1, 1, 10, tzinfo=UTC)
        assert sum(s.value for s in result) == 452 + 31

    async def test_in_progress_steps_never_reach_summary(self):
        client = AsyncMock()
        client.get_steps_data.return_value = [
            {"startGMT": "2024-01-01T09:00:00.0", "endGMT": "2024-01-01T09:15:00.0", "steps": 600},
        ]
        now = datetime(2024, 1, 1, 9, 7, tzinfo=UTC)

        samples = await fetch_day_samples(GarminSampleSource(client, UTC), datetime(2024, 1, 1, tzinfo=UTC), now)
        summary = build_summary(samples, now)

        assert samples == []
        assert summary.active_bucket_count == 0
        assert summary.last_activity_at is None
