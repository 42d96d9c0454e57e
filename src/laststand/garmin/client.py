"""
Async wrapper around the garminconnect library.

garminconnect is synchronous; we run it in a thread pool executor so it
doesn't block the asyncio event loop.

Authentication is handled via GarminSession (saved token store on disk).
Credentials are never stored in config or env.
"""
import asyncio
from datetime import date
from typing import Any, Dict, List, Optional

import garminconnect

from laststand.garmin.auth import GarminSession


class GarminClient:
    """
    Thin async wrapper over garminconnect.Garmin.

    Call connect() before any data methods. connect() resumes the saved token
    store via GarminSession; no credentials are required at runtime.
    """

    def __init__(self, session: Optional[GarminSession] = None):
        """
        Args:
            session: GarminSession instance. Defaults to GarminSession() which
                     reads from ~/.laststand/garmin_tokens/.
        """
        self._session = session or GarminSession()
        self._api: Optional[garminconnect.Garmin] = None

    async def connect(self) -> None:
        """
        Resume the saved session and validate it with Garmin's servers.

        Raises:
            NoSessionError: if no token store has been saved.
            SessionExpiredError: if the tokens were rejected.
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._connect_sync)

    def _connect_sync(self) -> None:
        self._api = self._session.build_client()

    async def _run(self, fn, *args, **kwargs):
        """Run a sync garminconnect call in the thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))

    async def get_steps_data(self, day: date) -> List[Dict[str, Any]]:
        """
        Fetch the day's step intervals.

        Garmin reports fixed 15-minute intervals:
            {"startGMT": "2024-01-01T09:00:00.0", "endGMT": "...",
             "steps": 120, "primaryActivityLevel": "active", ...}

        Returns an empty list when the API returns nothing for the day.
        """
        result = await self._run(self._api.get_steps_data, day.isoformat())
        return result or []
