"""
Spotify Web API track lookup.
"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests

from spotnotify.config import Settings
from spotnotify.exceptions import FetchFailedError
from spotnotify.models import TokenRecord, TrackMetadata

logger = logging.getLogger(__name__)

# album.images is ordered largest first; the third entry is the 64px thumbnail
COVER_IMAGE_INDEX = 2


def extract_track_id(value: str) -> str:
    """Extract a Spotify track ID from a URL, a spotify: URI, or a bare ID."""
    value = value.strip().split("?", 1)[0].split("#", 1)[0]
    if "/" in value:
        # Pattern: https://open.spotify.com/track/{id}?si=...
        path = urlsplit(value).path if "://" in value else value
        return path.rstrip("/").rsplit("/", 1)[-1]
    if value.startswith("spotify:"):
        return value.rsplit(":", 1)[-1]
    # If already an ID, return as-is
    return value


def parse_track(track_id: str, data: Dict[str, Any]) -> TrackMetadata:
    """
    Pull the display fields out of a track object.

    Raises:
        FetchFailedError: If the name or first artist is missing
    """
    name = data.get("name")
    artists = data.get("artists") or []
    artist_name = artists[0].get("name") if artists and isinstance(artists[0], dict) else None
    if not name or not artist_name:
        raise FetchFailedError(f"Track {track_id} response lacks name or artist")

    cover_url: Optional[str] = None
    album = data.get("album")
    images = album.get("images") if isinstance(album, dict) else None
    if isinstance(images, list) and len(images) > COVER_IMAGE_INDEX:
        image = images[COVER_IMAGE_INDEX]
        if isinstance(image, dict) and isinstance(image.get("url"), str):
            cover_url = image["url"] or None
    if cover_url is None:
        logger.info(f"Track {track_id} has no cover thumbnail")

    return TrackMetadata(
        track_id=track_id,
        name=name,
        artist_name=artist_name,
        cover_url=cover_url,
    )


class SpotifyClient:
    """Minimal Spotify Web API client for track metadata."""

    def __init__(self, settings: Settings):
        """
        Initialize with runtime settings.

        Args:
            settings: Provides the API base URL and the song.json scratch path
        """
        self.settings = settings

    def fetch_track(self, track_id: str, token: TokenRecord) -> TrackMetadata:
        """
        Look up a track and return its display fields.

        The raw response is kept in song.json until the run's cleanup. A
        401/403 here does not touch the token cache.

        Raises:
            FetchFailedError: On transport failure, non-2xx status or bad JSON
        """
        url = f"{self.settings.api_base_url}/tracks/{track_id}"
        headers = {"Authorization": token.authorization}
        logger.info(f"Fetching track metadata for {track_id}")

        try:
            response = requests.get(url, headers=headers, timeout=self.settings.http_timeout)
        except requests.RequestException as e:
            raise FetchFailedError(f"Track request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.info(f"Track endpoint response: {response.text}")
            raise FetchFailedError(
                f"Track request for {track_id} failed with HTTP {response.status_code}"
            )

        try:
            self.settings.song_path.write_text(response.text, encoding="utf-8")
        except OSError as e:
            raise FetchFailedError(f"Cannot write {self.settings.song_path}: {e}") from e

        try:
            data = json.loads(response.text)
        except ValueError as e:
            raise FetchFailedError(f"Invalid track response for {track_id}: {e}") from e
        if not isinstance(data, dict):
            raise FetchFailedError(f"Invalid track response for {track_id}")

        return parse_track(track_id, data)
