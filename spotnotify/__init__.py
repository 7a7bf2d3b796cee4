"""
Core modules for spotify-notify.
"""

__version__ = "1.0.0"

from spotnotify.auth import TokenCache
from spotnotify.config import Credentials, Settings, resolve_credentials
from spotnotify.exceptions import (
    AuthFailedError,
    ConfigError,
    CoverFetchError,
    FetchFailedError,
    HookEventError,
    MissingCredentialsError,
    NotifyError,
    SpotNotifyError,
    UsageError,
)
from spotnotify.models import TokenRecord, TrackMetadata
from spotnotify.notifier import Notifier, notify
from spotnotify.spotify_client import SpotifyClient, extract_track_id

__all__ = [
    "__version__",
    "Settings",
    "Credentials",
    "resolve_credentials",
    "TokenCache",
    "TokenRecord",
    "TrackMetadata",
    "SpotifyClient",
    "extract_track_id",
    "Notifier",
    "notify",
    "SpotNotifyError",
    "UsageError",
    "HookEventError",
    "ConfigError",
    "MissingCredentialsError",
    "AuthFailedError",
    "FetchFailedError",
    "CoverFetchError",
    "NotifyError",
]
