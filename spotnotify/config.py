"""
Configuration models and credential resolution.
"""

import os
import yaml
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from spotnotify.exceptions import ConfigError, MissingCredentialsError
from spotnotify.utils import get_cache_dir, get_config_path

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE_URL = "https://api.spotify.com/v1"

AUTH_FILE = "auth.json"
SONG_FILE = "song.json"
COVER_FILE = "cover.png"


class Settings(BaseModel):
    """Immutable runtime settings, built once at startup."""

    model_config = ConfigDict(frozen=True)

    cache_dir: Path
    config_path: Path
    verbose: bool = False
    hook_mode: bool = False
    token_url: str = TOKEN_URL
    api_base_url: str = API_BASE_URL
    notify_timeout_ms: int = 5000
    http_timeout: Optional[float] = None  # transport default
    cover_timeout: float = 10

    @property
    def auth_path(self) -> Path:
        return self.cache_dir / AUTH_FILE

    @property
    def song_path(self) -> Path:
        return self.cache_dir / SONG_FILE

    @property
    def cover_path(self) -> Path:
        return self.cache_dir / COVER_FILE

    @classmethod
    def from_environment(cls, verbose: bool = False, hook_mode: bool = False) -> "Settings":
        """
        Build settings from the process environment.

        Raises:
            ConfigError: If the cache directory cannot be created
        """
        try:
            cache_dir = get_cache_dir()
        except OSError as e:
            raise ConfigError(f"Cannot use cache directory: {e}") from e
        return cls(
            cache_dir=cache_dir,
            config_path=get_config_path(),
            verbose=verbose,
            hook_mode=hook_mode,
        )


class Credentials(BaseModel):
    """Spotify application credentials (client credentials flow)."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str

    @field_validator("client_id", "client_secret", mode="before")
    @classmethod
    def strip_and_require(cls, value):
        if value is None:
            raise ValueError("value is required")
        value = str(value).strip()
        if not value:
            raise ValueError("value must not be empty")
        return value


def _missing_fields(data: dict) -> list:
    missing = []
    for field in ("client_id", "client_secret"):
        value = data.get(field)
        if value is None or not str(value).strip():
            missing.append(field)
    return missing


def load_credentials_file(path: Path) -> Credentials:
    """
    Load credentials from the fallback YAML configuration file.

    The `client_id` and `client_secret` keys may sit at the top level or
    under a `spotify` mapping.

    Args:
        path: Path to YAML configuration file

    Returns:
        Credentials instance

    Raises:
        MissingCredentialsError: If the file is absent, invalid, or lacks a field
    """
    if not path.exists():
        raise MissingCredentialsError(
            "Missing Spotify credentials: set SPOTIFY_CLIENT_ID and "
            f"SPOTIFY_CLIENT_SECRET or create {path}"
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise MissingCredentialsError(f"Error reading config file {path}: {e}") from e

    if not isinstance(data, dict):
        data = {}
    section = data.get("spotify")
    if isinstance(section, dict):
        data = {**data, **section}

    missing = _missing_fields(data)
    if missing:
        raise MissingCredentialsError(
            f"Missing Spotify {', '.join(missing)} in {path}"
        )

    try:
        return Credentials(
            client_id=data["client_id"], client_secret=data["client_secret"]
        )
    except ValidationError as e:
        raise MissingCredentialsError(f"Invalid credentials in {path}: {e}") from e


def resolve_credentials(settings: Settings) -> Credentials:
    """
    Resolve client credentials.

    Environment variables win when both are set; otherwise the fallback
    configuration file is read. Has no network or write side effects.

    Raises:
        MissingCredentialsError: If no complete pair can be found
    """
    client_id = os.getenv("SPOTIFY_CLIENT_ID", "").strip()
    client_secret = os.getenv("SPOTIFY_CLIENT_SECRET", "").strip()
    if client_id and client_secret:
        return Credentials(client_id=client_id, client_secret=client_secret)

    return load_credentials_file(settings.config_path)
