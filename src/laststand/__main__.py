"""
Command-line entrypoint.

Usage:
    python -m laststand summary samples.json [--now 2024-01-01T12:00:00]
    python -m laststand today       # fetch today's steps from Garmin
    uvicorn laststand.api.main:app --host 0.0.0.0 --port 8000  # starts API

Both commands print the ActivitySummary as JSON on stdout.
"""
import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def _print_summary(summary) -> None:
    json.dump(summary.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")


def _run_file_summary(path: Path, now_arg: str) -> None:
    from laststand.analysis.buckets import start_of_day
    from laststand.analysis.samples import mixes_timezone_awareness
    from laststand.analysis.timeline import EngineConfig, build_summary
    from laststand.config import get_settings
    from laststand.sources.base import fetch_day_samples
    from laststand.sources.json_file import JsonFileSampleSource, SampleFileError

    source = JsonFileSampleSource(path)
    try:
        samples = source.load()
    except SampleFileError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if now_arg:
        try:
            now = datetime.fromisoformat(now_arg)
        except ValueError:
            logger.error("Invalid --now %r: expected an ISO-8601 timestamp.", now_arg)
            sys.exit(1)
    elif samples:
        # Replay the file as of its latest sample
        now = max(s.end for s in samples)
    else:
        logger.error("No samples in %s and no --now given.", path)
        sys.exit(1)

    if mixes_timezone_awareness(samples, now):
        logger.error(
            "Timestamps in %s and --now must all carry a UTC offset, or none may.", path
        )
        sys.exit(1)

    day_samples = asyncio.run(fetch_day_samples(source, start_of_day(now), now))
    config = EngineConfig.from_settings(get_settings())
    _print_summary(build_summary(day_samples, now, config))


async def _run_today() -> int:
    from laststand.analysis.buckets import start_of_day
    from laststand.analysis.timeline import EngineConfig, build_summary
    from laststand.config import get_settings
    from laststand.garmin.auth import GarminSession, NoSessionError, SessionExpiredError
    from laststand.garmin.client import GarminClient
    from laststand.garmin.source import GarminSampleSource
    from laststand.sources.base import fetch_day_samples

    settings = get_settings()
    tz = ZoneInfo(settings.timezone)

    client = GarminClient(GarminSession(Path(settings.garmin_tokens_dir)))
    try:
        await client.connect()
    except (NoSessionError, SessionExpiredError) as exc:
        logger.error("%s", exc)
        return 1

    now = datetime.now(tz)
    samples = await fetch_day_samples(GarminSampleSource(client, tz), start_of_day(now), now)
    _print_summary(build_summary(samples, now, EngineConfig.from_settings(settings)))
    return 0


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="laststand", description="Stand/move activity summary")
    sub = parser.add_subparsers(dest="command", required=True)

    file_cmd = sub.add_parser("summary", help="Summarise samples from a JSON file")
    file_cmd.add_argument("path", type=Path)
    file_cmd.add_argument("--now", default="", help="ISO-8601 reference time (default: latest sample end)")

    sub.add_parser("today", help="Summarise today's Garmin step data")

    args = parser.parse_args(argv)
    if args.command == "summary":
        _run_file_summary(args.path, args.now)
    else:
        sys.exit(asyncio.run(_run_today()))


if __name__ == "__main__":
    main()
