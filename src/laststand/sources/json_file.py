"""SampleSource reading a JSON list of sample records from disk."""
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from laststand.analysis.samples import Sample, SampleKind, records_to_samples


class SampleFileError(Exception):
    """Raised when a sample file is missing or not a JSON list of records."""


def load_samples(path: Path) -> List[Sample]:
    """
    Load every record in a JSON sample file.

    The file holds a list of record dicts (see records_to_samples), or an
    object with a "samples" list.

    Raises:
        SampleFileError: if the file doesn't exist or cannot be parsed.
    """
    if not path.exists():
        raise SampleFileError(f"Sample file not found: {path}")
    try:
        data = json.loads(path.read_text())
        if isinstance(data, dict):
            data = data.get("samples", [])
        if not isinstance(data, list):
            raise SampleFileError(f"Expected a list of samples in {path}")
        return records_to_samples(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise SampleFileError(f"Failed to read samples from {path}: {exc}") from exc


class JsonFileSampleSource:
    """Serves samples from a JSON file, filtered by kind and start time."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._samples: Optional[List[Sample]] = None

    def load(self) -> List[Sample]:
        """Read and cache every sample in the file. Raises SampleFileError."""
        if self._samples is None:
            self._samples = load_samples(self.path)
        return self._samples

    async def fetch(self, kind: SampleKind, start: datetime, end: datetime) -> List[Sample]:
        return [
            s for s in self.load()
            if s.kind == kind and start <= s.start < end
        ]
