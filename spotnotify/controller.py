"""
Invocation pipeline: resolve the track, authenticate, fetch, notify.

Components raise exceptions from spotnotify.exceptions; mapping them to an
exit status is left to the entry point.
"""

import logging
import os
import signal
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from spotnotify.auth import TokenCache
from spotnotify.config import Settings, resolve_credentials
from spotnotify.cover import fetch_cover
from spotnotify.exceptions import HookEventError, UsageError
from spotnotify.notifier import Notifier, notify
from spotnotify.spotify_client import SpotifyClient, extract_track_id
from spotnotify.utils import remove_file

logger = logging.getLogger(__name__)

CHANGE_EVENT = "change"


def resolve_track_id(identifier: Optional[str], hook_mode: bool) -> str:
    """
    Work out which track to look up.

    An explicit identifier wins. In hook mode spotifyd passes the event type
    in PLAYER_EVENT and the track in TRACK_ID; only track changes are handled.

    Raises:
        HookEventError: Hook mode for an event other than "change"
        UsageError: No identifier available
    """
    if identifier:
        return extract_track_id(identifier)

    if hook_mode:
        event = os.getenv("PLAYER_EVENT")
        if event is None:
            raise HookEventError("PLAYER_EVENT is not set; not called from spotifyd?")
        if event != CHANGE_EVENT:
            raise HookEventError(f"Ignoring player event '{event}'")
        track_id = os.getenv("TRACK_ID", "").strip()
        if track_id:
            return extract_track_id(track_id)

    raise UsageError("Track identifier not specified")


@contextmanager
def scratch_files(settings: Settings) -> Iterator[None]:
    """Remove the per-run song.json and cover.png however the block exits."""
    try:
        yield
    finally:
        for path in (settings.song_path, settings.cover_path):
            remove_file(path)


@contextmanager
def terminate_as_exit() -> Iterator[None]:
    """Turn SIGTERM into SystemExit so finalizers run."""

    def handler(signum, frame):
        raise SystemExit(128 + signum)

    previous = signal.signal(signal.SIGTERM, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def run(
    settings: Settings,
    track_id: str,
    notifiers: Optional[Sequence[Notifier]] = None,
) -> Optional[str]:
    """
    Look up a track and show it as a notification.

    Returns:
        Name of the notification backend used, or None if none is installed
    """
    logger.info(f"Track ID: {track_id}")

    credentials = resolve_credentials(settings)
    token = TokenCache(settings, credentials).get_valid_token()

    track = SpotifyClient(settings).fetch_track(track_id, token)
    logger.info(f"Now playing: {track.artist_name} - {track.name}")

    cover = fetch_cover(track.cover_url, settings)

    return notify(
        track.name,
        track.artist_name,
        cover,
        notifiers=notifiers,
        timeout_ms=settings.notify_timeout_ms,
    )
