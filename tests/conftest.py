"""
Shared pytest fixtures for spotify-notify tests.
"""
import json
import logging
import os
import tempfile
import time
from pathlib import Path

import pytest

from spotnotify.config import Credentials, Settings
from spotnotify.logging_handler import DiagnosticFormatter


# Sample Spotify API Response Data
# Using a real Spotify track: YYZ by Rush
SAMPLE_TRACK_ID = "1RKbVxcm267VdsIzqY7msi"

SAMPLE_TRACK_DATA = {
    "id": SAMPLE_TRACK_ID,
    "name": "YYZ",
    "artists": [{"name": "Rush"}, {"name": "Geddy Lee"}],
    "album": {
        "id": "77CZUF57sYqgtznUe3OikQ",
        "name": "Moving Pictures (40th Anniversary Super Deluxe)",
        "images": [
            {"url": "https://i.scdn.co/image/cover640", "width": 640, "height": 640},
            {"url": "https://i.scdn.co/image/cover300", "width": 300, "height": 300},
            {"url": "https://i.scdn.co/image/cover64", "width": 64, "height": 64},
        ],
    },
    "duration_ms": 266000,
    "external_urls": {"spotify": f"https://open.spotify.com/track/{SAMPLE_TRACK_ID}"},
}

SAMPLE_TOKEN_DATA = {
    "access_token": "BQDtest-access-token",
    "token_type": "Bearer",
    "expires_in": 3600,
}

ENV_VARS = (
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
    "PLAYER_EVENT",
    "TRACK_ID",
    "SPOTIFY_NOTIFY_CACHE_DIR",
    "SPOTIFY_NOTIFY_CONFIG",
)


@pytest.fixture
def tmp_test_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(tmp_test_dir, monkeypatch):
    """Point HOME at a temp dir and clear variables the program reads."""
    monkeypatch.setenv("HOME", str(tmp_test_dir))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_test_dir


@pytest.fixture
def settings(tmp_test_dir):
    """Settings rooted in the temp dir."""
    cache_dir = tmp_test_dir / "cache"
    cache_dir.mkdir()
    return Settings(
        cache_dir=cache_dir,
        config_path=tmp_test_dir / "config.yaml",
    )


@pytest.fixture
def credentials():
    return Credentials(
        client_id="85d6e012bea84598ac13d3ce963a04b2",
        client_secret="1a0c452389fd4147905d753a31d1b456",
    )


@pytest.fixture
def env_credentials(monkeypatch, credentials):
    """Export credentials through the environment."""
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", credentials.client_id)
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", credentials.client_secret)
    return credentials


def write_token_cache(path: Path, data=None, age: float = 0) -> Path:
    """Write a token cache file whose mtime is `age` seconds in the past."""
    if data is None:
        data = SAMPLE_TOKEN_DATA
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    mtime = int(time.time() - age)
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, DiagnosticFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
