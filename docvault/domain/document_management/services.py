"""
Document Management Services

Domain service for the document lifecycle: upload, read, tag update,
deletion and tag search.
"""

import logging
from typing import BinaryIO, List, Optional

from docvault.domain.clock import Clock, utc_now
from docvault.domain.errors import (
    DocumentNotFound,
    DomainError,
    FileTooLarge,
    InvalidFileType,
    ServiceUnknown,
    translate_storage_errors,
)
from docvault.domain.file_storage.storage_repository import IFileStorageRepository
from docvault.domain.secondary_effects import best_effort

from .entities import Document
from .repositories import IDocumentRepository
from .value_objects import DocumentChanges, SearchTags

PDF_MIME_TYPE = "application/pdf"


class DocumentManager:
    """
    Domain service for managing stored documents.

    Coordinates the document repository and the file storage repository.
    Storage errors are translated at each repository call; everything this
    service raises is a DomainError.
    """

    MAX_FILENAME_ATTEMPTS = 5

    def __init__(
        self,
        document_repository: IDocumentRepository,
        storage_repository: IFileStorageRepository,
        max_file_size: int,
        logger: Optional[logging.Logger] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize DocumentManager with repositories.

        Args:
            document_repository: Repository for document metadata
            storage_repository: Repository for the uploaded bytes
            max_file_size: Largest accepted upload, in bytes
            logger: Logger for secondary-effect failures
            clock: Source of the current time
        """
        self.document_repo = document_repository
        self.storage_repo = storage_repository
        self.max_file_size = max_file_size
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock

    def upload(
        self,
        content: BinaryIO,
        mime_type: str,
        declared_size: int,
        original_filename: str,
        tags: Optional[List[str]] = None,
    ) -> Document:
        """
        Store an uploaded PDF and record its metadata.

        Type and size are validated before any I/O happens.

        Args:
            content: Uploaded bytes as a file-like object
            mime_type: Declared content type
            declared_size: Size in bytes
            original_filename: Filename supplied by the uploader
            tags: Optional free-text tags

        Returns:
            The stored Document

        Raises:
            InvalidFileType: If the content type is not application/pdf
            FileTooLarge: If declared_size exceeds max_file_size
            ServiceUnavailable, ServiceUnknown: On storage failures
        """
        if mime_type != PDF_MIME_TYPE:
            raise InvalidFileType("Only PDF files are allowed")
        if declared_size > self.max_file_size:
            raise FileTooLarge(self.max_file_size, declared_size)

        try:
            self.storage_repo.ensure_directory()
            file_path = self._allocate_file_path()
            self.storage_repo.save(file_path, content)
        except (OSError, ValueError) as e:
            raise ServiceUnknown("create_document", f"Failed to store file: {e}", original_error=e) from e

        document = Document.create(
            filename=file_path,
            original_filename=original_filename,
            file_size=declared_size,
            tags=tags,
            now=self.clock(),
        )

        try:
            with translate_storage_errors("create_document"):
                stored = self.document_repo.create(document)
        except DomainError:
            with best_effort(self.logger, f"remove orphaned file {file_path}"):
                self.storage_repo.delete(file_path)
            raise

        self.logger.info(f"Document {stored.id} stored as {stored.filename}")
        return stored

    def _allocate_file_path(self) -> str:
        """Pick a stored filename that is not already taken."""
        for _ in range(self.MAX_FILENAME_ATTEMPTS):
            candidate = Document.generate_stored_filename()
            if not self.storage_repo.exists(candidate):
                return candidate
        raise OSError("Could not allocate a unique filename")

    def list_documents(self) -> List[Document]:
        """Retrieve all documents."""
        with translate_storage_errors("get_all_documents"):
            return self.document_repo.find_all()

    def get_document(self, document_id: int) -> Document:
        """
        Retrieve a document by id.

        Raises:
            DocumentNotFound: If the document doesn't exist
        """
        with translate_storage_errors("get_document"):
            document = self.document_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    def update_tags(self, document_id: int, tags: Optional[List[str]] = None) -> Document:
        """
        Partially update a document.

        When tags is None nothing is written and updated_at stays as it is.
        Any list, including an empty one, replaces the tags and bumps
        updated_at.

        Raises:
            DocumentNotFound: If the document doesn't exist
        """
        changes = DocumentChanges(tags=tags, updated_at=self.clock())
        if changes.is_empty():
            return self.get_document(document_id)

        with translate_storage_errors("update_document"):
            document = self.document_repo.update(document_id, changes)
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    def delete_document(self, document_id: int) -> Document:
        """
        Delete a document and, best effort, its backing file.

        A file that cannot be removed (or is already gone) is logged and
        does not prevent the record from being removed.

        Returns:
            The document as it was before deletion

        Raises:
            DocumentNotFound: If the document doesn't exist
        """
        with translate_storage_errors("delete_document"):
            document = self.document_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFound(document_id)

        with best_effort(self.logger, f"delete file {document.file_path}"):
            self.storage_repo.delete(document.file_path)

        with translate_storage_errors("delete_document"):
            deleted = self.document_repo.delete(document_id)
        if deleted is None:
            raise DocumentNotFound(document_id)

        self.logger.info(f"Document {document_id} deleted")
        return document

    def search_by_tags(self, tags: Optional[List[str]]) -> List[Document]:
        """
        Find documents by tag.

        Raises:
            InvalidSearchTags: If no tag was given
        """
        query = SearchTags.from_list(tags)
        with translate_storage_errors("search_documents"):
            return self.document_repo.find_by_tags(list(query.tags))
