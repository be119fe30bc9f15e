"""
Document Management Entities

Domain entity for an uploaded PDF document.
"""

import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from docvault.domain.clock import utc_now


@dataclass
class Document:
    """
    Entity representing an uploaded document and its metadata.

    The id is assigned by the storage collaborator on creation and is stable
    for the life of the record. file_path is relative to the storage root
    and always points at the bytes written at upload time.
    """
    filename: str
    original_filename: str
    file_path: str
    file_size: int
    tags: List[str] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, filename: str, original_filename: str, file_size: int,
               tags: Optional[List[str]] = None,
               now: Optional[datetime] = None) -> 'Document':
        """
        Factory method for a new, not yet persisted document.

        Args:
            filename: System-generated stored filename
            original_filename: Filename supplied by the uploader
            file_size: Size in bytes
            tags: Optional free-text tags
            now: Creation instant (defaults to the current UTC time)

        Returns:
            New Document instance without an id
        """
        now = now or utc_now()
        return cls(
            filename=filename,
            original_filename=original_filename,
            file_path=filename,
            file_size=file_size,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def generate_stored_filename(extension: str = "pdf") -> str:
        """
        Generate a stored filename from a millisecond timestamp and a
        random suffix, e.g. '1718000000000-a1b2c3.pdf'.
        """
        timestamp = int(time.time() * 1000)
        suffix = secrets.token_hex(3)
        return f"{timestamp}-{suffix}.{extension}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "filename": self.filename,
            "original_filename": self.original_filename,
            "file_path": self.file_path,
            "file_size": self.file_size,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
