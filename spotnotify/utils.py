"""
Shared utility functions for spotify-notify.

Path resolution for the per-user cache directory and the fallback
configuration file.
"""

import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

APP_NAME = "spotify-notify"


def get_home_dir() -> Path:
    """Return $HOME, falling back to the password database entry."""
    home = os.getenv("HOME")
    if home:
        return Path(home)
    return Path.home()


def get_cache_dir() -> Path:
    """
    Get the cache directory path from environment variable or default.

    Reads the SPOTIFY_NOTIFY_CACHE_DIR environment variable and returns a Path
    object for the cache directory. If the environment variable is not set,
    defaults to `$HOME/.cache/spotify-notify`. The directory is created if it
    doesn't exist.

    Returns:
        Path object pointing to the cache directory

    Raises:
        OSError: If the directory cannot be created or accessed
    """
    cache_dir_str = os.getenv("SPOTIFY_NOTIFY_CACHE_DIR")
    if cache_dir_str:
        cache_dir = Path(cache_dir_str)
    else:
        cache_dir = get_home_dir() / ".cache" / APP_NAME

    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Cache directory: {cache_dir}")
    except OSError as e:
        logger.error(f"Failed to create cache directory {cache_dir}: {e}")
        raise

    return cache_dir


def get_config_path() -> Path:
    """
    Get the fallback configuration file path.

    Honours SPOTIFY_NOTIFY_CONFIG, otherwise `$HOME/.config/spotify-notify/config.yaml`.
    The file is not required to exist.
    """
    config_path_str = os.getenv("SPOTIFY_NOTIFY_CONFIG")
    if config_path_str:
        return Path(config_path_str)
    return get_home_dir() / ".config" / APP_NAME / "config.yaml"


def remove_file(path: Path) -> bool:
    """Delete a file if present. Returns True if something was removed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug(f"Removed {path}")
    return True
