"""
Capture a real Garmin steps response and save it as a test fixture.

Run this script on a machine with a saved Garmin token store:

    python scripts/capture_fixtures.py [--date YYYY-MM-DD]

If no date is given, yesterday is used (a complete day of intervals).

Outputs (overwrite tests/fixtures/):
    garmin_steps_data.json    — from get_steps_data()

The normalizer tests use this fixture so they run against the real response
schema, not a hand-crafted guess.
"""
import argparse
import json
import sys
from datetime import date, timedelta
from pathlib import Path

# Allow running from repo root without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from laststand.config import get_settings
from laststand.garmin.auth import GarminSession, NoSessionError, SessionExpiredError


FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def _save(name: str, data: object) -> None:
    path = FIXTURES_DIR / name
    path.write_text(json.dumps(data, indent=2, default=str))
    print(f"  Saved {path} ({path.stat().st_size} bytes)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Capture real Garmin steps fixture")
    parser.add_argument("--date", help="Day to capture, YYYY-MM-DD (default: yesterday)")
    args = parser.parse_args()

    day = date.fromisoformat(args.date) if args.date else date.today() - timedelta(days=1)

    print("Connecting to Garmin...")
    session = GarminSession(Path(get_settings().garmin_tokens_dir))
    try:
        api = session.build_client()
    except (NoSessionError, SessionExpiredError) as exc:
        print(f"  {exc}")
        sys.exit(1)

    print(f"Fetching steps for {day.isoformat()}...")
    steps = api.get_steps_data(day.isoformat())
    _save("garmin_steps_data.json", steps)
    print(f"Done: {len(steps)} intervals.")


if __name__ == "__main__":
    main()
