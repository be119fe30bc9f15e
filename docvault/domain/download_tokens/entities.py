"""
Download Token Entities

Domain entity for a single-use download token.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from docvault.domain.clock import utc_now

from .value_objects import TokenState


@dataclass
class DownloadToken:
    """
    Entity representing a bearer token that grants one download of a
    document's file.

    A token is valid for consumption iff used_at is None and the current
    instant is strictly before expires_at. Expiry is derived from the clock;
    no flag is stored for it.
    """
    token: str
    document_id: int
    expires_at: datetime
    created_at: datetime
    used_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def create(cls, document_id: int, ttl_minutes: int = 15,
               now: Optional[datetime] = None) -> 'DownloadToken':
        """
        Factory method to issue a new token.

        Args:
            document_id: Owning document id
            ttl_minutes: Time to live in minutes (default: 15)
            now: Issue instant (defaults to the current UTC time)

        Returns:
            New, unused DownloadToken
        """
        now = now or utc_now()
        return cls(
            token=cls._generate_token(),
            document_id=document_id,
            expires_at=now + timedelta(minutes=ttl_minutes),
            created_at=now,
        )

    @staticmethod
    def _generate_token(length: int = 32) -> str:
        """
        Generate a cryptographically secure random token.

        Args:
            length: Token length in bytes (default: 32, i.e. 256 bits)

        Returns:
            Hex-encoded token string (64 characters by default)
        """
        return secrets.token_hex(length)

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the token is at or past its expiry."""
        return (now or utc_now()) >= self.expires_at

    def state(self, now: Optional[datetime] = None) -> TokenState:
        """Current lifecycle state. A consumed token stays consumed after expiry."""
        if self.is_used:
            return TokenState.CONSUMED
        if self.is_expired(now):
            return TokenState.EXPIRED
        return TokenState.ISSUED

    def get_remaining_seconds(self, now: Optional[datetime] = None) -> int:
        """Seconds until expiry (0 if expired)."""
        remaining = self.expires_at - (now or utc_now())
        return max(0, int(remaining.total_seconds()))

    def generate_download_url(self, base_url: str = "/api/v1/documents/download") -> str:
        """
        Generate the download URL for this token.

        Args:
            base_url: Base URL for token downloads

        Returns:
            Download URL
        """
        return f"{base_url.rstrip('/')}/{self.token}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "token": self.token,
            "document_id": self.document_id,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat(),
            "used_at": self.used_at.isoformat() if self.used_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DownloadToken':
        """Create DownloadToken from dictionary."""
        used_at = data.get("used_at")
        return cls(
            token=data["token"],
            document_id=int(data["document_id"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            used_at=datetime.fromisoformat(used_at) if used_at else None,
            id=data.get("id"),
        )
