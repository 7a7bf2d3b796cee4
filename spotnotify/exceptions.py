"""
Custom exceptions for spotify-notify.
"""


class SpotNotifyError(Exception):
    """Base exception for all spotify-notify errors."""


class UsageError(SpotNotifyError):
    """Bad command line arguments or flags."""


class HookEventError(UsageError):
    """Hook mode invoked for a player event other than a track change."""


class ConfigError(SpotNotifyError):
    """Configuration errors."""


class MissingCredentialsError(ConfigError):
    """No Spotify client credentials in the environment or config file."""


class AuthFailedError(SpotNotifyError):
    """Access token could not be obtained or the cached token is corrupt."""


class FetchFailedError(SpotNotifyError):
    """Track metadata lookup failed."""


class CoverFetchError(SpotNotifyError):
    """Cover art download failed (never fatal)."""


class NotifyError(SpotNotifyError):
    """A notification backend was found but failed to display the message."""
