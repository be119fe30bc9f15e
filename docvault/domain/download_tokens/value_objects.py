"""
Download Token Value Objects
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from docvault.domain.document_management.entities import Document


class TokenState(Enum):
    """Download token lifecycle states."""

    ISSUED = "issued"
    CONSUMED = "consumed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class IssuedDownloadLink:
    """Result of issuing a download token for a document."""
    token: str
    expires_at: datetime
    expires_in_minutes: int
    download_url: str
    document: Document

    def to_dict(self) -> dict:
        return {
            "download_url": self.download_url,
            "token": self.token,
            "expires_at": self.expires_at.isoformat(),
            "expires_in_minutes": self.expires_in_minutes,
            "document_id": self.document.id,
            "original_filename": self.document.original_filename,
        }


@dataclass(frozen=True)
class DocumentDownload:
    """Result of consuming a download token: what to stream and from where."""
    document: Document
    file_path: str
    absolute_path: Path
