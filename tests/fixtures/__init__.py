"""Shared test fixtures: in-memory repositories and a controllable clock."""

from .mock_repositories import (
    MAX_FILE_SIZE,
    FixedClock,
    MockDocumentRepository,
    MockDownloadTokenRepository,
    MockFileStorageRepository,
    pdf_stream,
)

__all__ = [
    "MAX_FILE_SIZE",
    "FixedClock",
    "MockDocumentRepository",
    "MockDownloadTokenRepository",
    "MockFileStorageRepository",
    "pdf_stream",
]
