"""
Client credentials authentication with a file-backed token cache.

The raw token endpoint response is stored in `auth.json`. The file's
modification time is the token's issue time, so a token is valid while
`now - mtime < expires_in`. The cache is only ever replaced wholesale or
deleted.
"""

import base64
import json
import logging
import time
from typing import Any, Callable, Dict

import requests

from spotnotify.config import Credentials, Settings
from spotnotify.exceptions import AuthFailedError
from spotnotify.models import TokenRecord
from spotnotify.utils import remove_file

logger = logging.getLogger(__name__)


def basic_auth_header(credentials: Credentials) -> str:
    """Build the HTTP Basic Authorization value for the token endpoint."""
    raw = f"{credentials.client_id}:{credentials.client_secret}"
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


class TokenCache:
    """File-backed cache holding a single access token."""

    def __init__(
        self,
        settings: Settings,
        credentials: Credentials,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            settings: Runtime settings (cache location, token endpoint)
            credentials: Client id/secret used when (re)authenticating
            clock: Source of the current time, in seconds since the epoch
        """
        self.settings = settings
        self.credentials = credentials
        self.clock = clock

    @property
    def path(self):
        return self.settings.auth_path

    def get_valid_token(self) -> TokenRecord:
        """
        Return a usable token, authenticating when the cache is missing or stale.

        Raises:
            AuthFailedError: If authentication fails or the cache is corrupt
        """
        if not self.path.exists():
            logger.info("No cached token, authenticating")
            self.authenticate()
            return self._load_record()

        record = self._load_record()
        if record.is_valid(self.clock()):
            logger.info("Using cached token")
            return record

        logger.info("Cached token expired, re-authenticating")
        self.authenticate()
        return self._load_record()

    def authenticate(self) -> None:
        """
        Request a new token and overwrite the cache with the raw response.

        Raises:
            AuthFailedError: On transport failure or a non-2xx response
        """
        headers = {"Authorization": basic_auth_header(self.credentials)}
        data = {"grant_type": "client_credentials"}

        try:
            response = requests.post(
                self.settings.token_url,
                headers=headers,
                data=data,
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as e:
            self.invalidate()
            raise AuthFailedError(f"Token request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.info(f"Token endpoint response: {response.text}")
            self.invalidate()
            raise AuthFailedError(
                f"Token request failed with HTTP {response.status_code}"
            )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(response.text, encoding="utf-8")
        except OSError as e:
            self.invalidate()
            raise AuthFailedError(f"Cannot write token cache {self.path}: {e}") from e

        logger.info(f"Saved new token to {self.path}")

    def invalidate(self) -> None:
        """Delete the cache file, if any."""
        remove_file(self.path)

    def _read_json(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.invalidate()
            raise AuthFailedError(f"Corrupt token cache {self.path}: {e}") from e
        if not isinstance(data, dict):
            self.invalidate()
            raise AuthFailedError(f"Corrupt token cache {self.path}: not an object")
        return data

    def _read_expires_in(self, data: Dict[str, Any]) -> int:
        try:
            return int(data["expires_in"])
        except (KeyError, TypeError, ValueError) as e:
            self.invalidate()
            raise AuthFailedError(
                f"Token cache {self.path} has no usable expires_in"
            ) from e

    def _load_record(self) -> TokenRecord:
        data = self._read_json()
        expires_in = self._read_expires_in(data)
        access_token = data.get("access_token")
        token_type = data.get("token_type")
        if not isinstance(access_token, str) or not access_token:
            self.invalidate()
            raise AuthFailedError(f"Token cache {self.path} has no access_token")
        if not isinstance(token_type, str) or not token_type:
            self.invalidate()
            raise AuthFailedError(f"Token cache {self.path} has no token_type")

        return TokenRecord(
            access_token=access_token,
            token_type=token_type,
            expires_in=expires_in,
            issued_at=self.path.stat().st_mtime,
        )
