"""
Download Token Services

Domain service for issuing and consuming single-use download tokens.
"""

import logging
from typing import Optional

from docvault.domain.clock import Clock, utc_now
from docvault.domain.document_management.repositories import IDocumentRepository
from docvault.domain.errors import (
    DocumentNotFound,
    DownloadTokenAlreadyUsed,
    DownloadTokenExpired,
    FileNotFound,
    translate_storage_errors,
)
from docvault.domain.file_storage.storage_repository import IFileStorageRepository
from docvault.domain.secondary_effects import best_effort

from .entities import DownloadToken
from .repositories import IDownloadTokenRepository
from .value_objects import DocumentDownload, IssuedDownloadLink

DEFAULT_DOWNLOAD_BASE_URL = "/api/v1/documents/download"


class DownloadTokenManager:
    """
    Domain service for the download token lifecycle.

    Issued -> Consumed (used_at set) or Expired (clock passes expires_at).
    Both end states are terminal.
    """

    def __init__(
        self,
        token_repository: IDownloadTokenRepository,
        document_repository: IDocumentRepository,
        storage_repository: IFileStorageRepository,
        default_ttl_minutes: int = 15,
        download_base_url: str = DEFAULT_DOWNLOAD_BASE_URL,
        logger: Optional[logging.Logger] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize DownloadTokenManager with repositories.

        Args:
            token_repository: Repository for download tokens
            document_repository: Repository for document metadata
            storage_repository: Repository for the uploaded bytes
            default_ttl_minutes: Token lifetime when issue() is not given one
            download_base_url: Prefix of generated download URLs
            logger: Logger for secondary-effect failures
            clock: Source of the current time
        """
        self.token_repo = token_repository
        self.document_repo = document_repository
        self.storage_repo = storage_repository
        self.default_ttl_minutes = default_ttl_minutes
        self.download_base_url = download_base_url
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock

    def issue(self, document_id: int, ttl_minutes: Optional[int] = None) -> IssuedDownloadLink:
        """
        Issue a download token for an existing document.

        The document is looked up first so that no token is ever created
        for a missing document.

        Raises:
            DocumentNotFound: If the document doesn't exist
        """
        ttl = ttl_minutes if ttl_minutes is not None else self.default_ttl_minutes

        with translate_storage_errors("generate_download_link"):
            document = self.document_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFound(document_id)

        token = DownloadToken.create(document_id, ttl_minutes=ttl, now=self.clock())
        with translate_storage_errors("generate_download_link"):
            stored = self.token_repo.create(token)

        self.logger.info(
            f"Issued download token {stored.token[:8]}... for document {document_id}, "
            f"expires at {stored.expires_at.isoformat()}"
        )
        return IssuedDownloadLink(
            token=stored.token,
            expires_at=stored.expires_at,
            expires_in_minutes=ttl,
            download_url=stored.generate_download_url(self.download_base_url),
            document=document,
        )

    def consume(self, token: str) -> DocumentDownload:
        """
        Consume a download token.

        Checks, in order: the token exists and is not expired, it has not
        been used, its document exists, and the document's file exists.
        Then the token is marked used. Of two concurrent consumers only
        one wins the mark; the other gets DownloadTokenAlreadyUsed. A
        storage failure while marking is logged and ignored, since access
        has already been checked at that point.

        Raises:
            DownloadTokenInvalid: If the token doesn't exist
            DownloadTokenExpired: If the token is past its expiry
            DownloadTokenAlreadyUsed: If the token was already consumed
            DocumentNotFound: If the owning document was deleted
            FileNotFound: If the document's file is missing
        """
        now = self.clock()

        with translate_storage_errors("download_by_token"):
            record = self.token_repo.find_valid_token(token, now)

        if record.is_expired(now):
            raise DownloadTokenExpired(token)
        if record.is_used:
            raise DownloadTokenAlreadyUsed(token)

        with translate_storage_errors("download_by_token"):
            document = self.document_repo.find_by_id(record.document_id)
        if document is None:
            raise DocumentNotFound(record.document_id)

        if not self.storage_repo.exists(document.file_path):
            raise FileNotFound(document.file_path)

        claimed = True
        with best_effort(self.logger, f"mark token {token[:8]}... as used"):
            claimed = self.token_repo.mark_used(token, now)
        if not claimed:
            raise DownloadTokenAlreadyUsed(token)

        self.logger.info(f"Token {token[:8]}... consumed for document {document.id}")
        return DocumentDownload(
            document=document,
            file_path=document.file_path,
            absolute_path=self.storage_repo.resolve_path(document.file_path),
        )
