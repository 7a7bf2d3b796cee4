"""
Data models for spotify-notify.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TokenRecord:
    """Cached OAuth access token."""

    access_token: str
    token_type: str
    expires_in: int
    issued_at: float

    @property
    def authorization(self) -> str:
        """Value for the Authorization header of API requests."""
        return f"{self.token_type} {self.access_token}"

    def is_valid(self, now: float) -> bool:
        return now - self.issued_at < self.expires_in


@dataclass
class TrackMetadata:
    """Display fields for a single track."""

    track_id: str
    name: str
    artist_name: str
    cover_url: Optional[str] = None
