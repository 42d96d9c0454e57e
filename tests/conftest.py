"""Shared test fixtures."""
from pathlib import Path
from typing import List

import pytest

from factories import stand, steps
from laststand.analysis.samples import Sample

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(name="fixtures_dir")
def fixtures_dir_fixture() -> Path:
    return FIXTURES_DIR


@pytest.fixture(name="morning_samples")
def morning_samples_fixture() -> List[Sample]:
    """
    A short working morning on 2024-01-01:
      09:00-09:04  zero steps reported
      09:05        35 steps
      09:40        12 steps
      10:02        48 steps
    plus a stood 09:00 hour and an idle 10:00 hour.
    """
    return [
        steps(9, 0, 0),
        steps(9, 1, 0),
        steps(9, 2, 0),
        steps(9, 3, 0),
        steps(9, 4, 0),
        steps(9, 5, 35),
        steps(9, 40, 12),
        steps(10, 2, 48),
        stand(9, stood=True),
        stand(10, stood=False),
    ]
