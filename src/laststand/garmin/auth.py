"""
Resume a saved Garmin Connect token store.

This package never logs in with credentials. The token store (the
oauth1_token.json / oauth2_token.json pair garminconnect writes after an
interactive login) is created once, outside this package, e.g.:

    api = garminconnect.Garmin(email, password)
    api.login()
    api.garth.dump("~/.laststand/garmin_tokens")

GarminSession only checks that the store exists and hands it to
garminconnect, which refreshes the OAuth2 token on its own while the OAuth1
token stays valid.
"""
import logging
from pathlib import Path

import garminconnect

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

TOKENS_DIR_DEFAULT = Path.home() / ".laststand" / "garmin_tokens"
TOKEN_FILE_NAMES = ("oauth1_token.json", "oauth2_token.json")


# ── Exceptions ────────────────────────────────────────────────────────────────

class NoSessionError(RuntimeError):
    """Raised when no saved token store exists."""


class SessionExpiredError(RuntimeError):
    """Raised when a saved token store is rejected by Garmin's servers."""


# ── Main class ────────────────────────────────────────────────────────────────

class GarminSession:
    """
    Builds an authenticated garminconnect.Garmin from a saved token store.

    Usage:
        session = GarminSession(Path("~/.laststand/garmin_tokens"))
        if session.has_session():
            api = session.build_client()
    """

    def __init__(self, tokens_dir: Path = TOKENS_DIR_DEFAULT):
        self._tokens_dir = Path(tokens_dir).expanduser()

    @property
    def tokens_dir(self) -> Path:
        return self._tokens_dir

    def has_session(self) -> bool:
        """Return True if both token files exist on disk."""
        return all((self._tokens_dir / name).exists() for name in TOKEN_FILE_NAMES)

    def build_client(self) -> garminconnect.Garmin:
        """
        Build an authenticated Garmin client from the saved token store.

        Returns:
            Authenticated garminconnect.Garmin instance.

        Raises:
            NoSessionError: if the token store is missing.
            SessionExpiredError: if Garmin rejects the saved tokens.
        """
        if not self.has_session():
            raise NoSessionError(
                f"No Garmin token store found at {self._tokens_dir}. "
                "Log in once with garminconnect and dump the tokens there."
            )

        api = garminconnect.Garmin()
        try:
            api.login(str(self._tokens_dir))
        except Exception as exc:
            # login() could not refresh from the stored tokens
            raise SessionExpiredError(
                f"Garmin rejected the token store at {self._tokens_dir}. "
                "Log in again and re-dump the tokens."
            ) from exc

        logger.info("Resumed Garmin session from %s", self._tokens_dir)
        return api
