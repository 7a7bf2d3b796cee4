"""
Best-effort cover art download.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from spotnotify.config import Settings
from spotnotify.exceptions import CoverFetchError
from spotnotify.utils import remove_file

logger = logging.getLogger(__name__)


def download_cover(url: str, destination: Path, timeout: float = 10) -> Path:
    """
    Download an image to destination.

    Raises:
        CoverFetchError: On transport failure, non-2xx status or write error
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise CoverFetchError(f"Cover request failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise CoverFetchError(f"Cover request failed with HTTP {response.status_code}")

    try:
        destination.write_bytes(response.content)
    except OSError as e:
        raise CoverFetchError(f"Cannot write {destination}: {e}") from e
    return destination


def fetch_cover(url: Optional[str], settings: Settings) -> Optional[Path]:
    """Fetch cover art into the scratch cover file, or return None."""
    if not url:
        return None

    try:
        path = download_cover(url, settings.cover_path, timeout=settings.cover_timeout)
    except CoverFetchError as e:
        logger.info(f"No cover art: {e}")
        remove_file(settings.cover_path)
        return None

    logger.info(f"Downloaded cover art to {path}")
    return path
