"""
Document Management Repositories

Repository interface for document metadata persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .entities import Document
from .value_objects import DocumentChanges


class IDocumentRepository(ABC):
    """
    Abstract repository interface for document metadata persistence.

    Every method may raise a docvault.domain.errors.StorageError subclass.
    A missing document is reported as None, never as an error.
    """

    @abstractmethod
    def create(self, document: Document) -> Document:
        """
        Persist a new document.

        Args:
            document: Document without an id

        Returns:
            The stored document, with its id assigned
        """
        pass

    @abstractmethod
    def find_by_id(self, document_id: int) -> Optional[Document]:
        """Retrieve a document by id, or None if it doesn't exist."""
        pass

    @abstractmethod
    def find_all(self) -> List[Document]:
        """Retrieve every stored document."""
        pass

    @abstractmethod
    def update(self, document_id: int, changes: DocumentChanges) -> Optional[Document]:
        """
        Apply a partial update.

        Args:
            document_id: Document identifier
            changes: Fields to change; an empty change set leaves the
                record (including updated_at) untouched

        Returns:
            The document after the update, or None if it doesn't exist
        """
        pass

    @abstractmethod
    def delete(self, document_id: int) -> Optional[Document]:
        """
        Delete a document record.

        Returns:
            The deleted document, or None if it didn't exist
        """
        pass

    @abstractmethod
    def find_by_tags(self, search_tags: Sequence[str]) -> List[Document]:
        """
        Retrieve documents whose tags match any of the search tags.

        Matching follows value_objects.tags_match (case-insensitive,
        equals-or-contains, OR across search tags).
        """
        pass
