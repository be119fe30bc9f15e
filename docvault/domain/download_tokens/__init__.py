"""
Download Token Domain

Single-use, time-limited bearer tokens that gate access to a document's
file.
"""

from .entities import DownloadToken
from .repositories import IDownloadTokenRepository
from .services import DownloadTokenManager
from .value_objects import DocumentDownload, IssuedDownloadLink, TokenState

__all__ = [
    "DocumentDownload",
    "DownloadToken",
    "DownloadTokenManager",
    "IDownloadTokenRepository",
    "IssuedDownloadLink",
    "TokenState",
]
