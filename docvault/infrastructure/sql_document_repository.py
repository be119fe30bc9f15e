"""
SQL Document Repository Implementation

SQLAlchemy-backed implementation of IDocumentRepository. Each call opens its
own session from the injected sessionmaker and commits before returning.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from docvault.domain.document_management.entities import Document
from docvault.domain.document_management.repositories import IDocumentRepository
from docvault.domain.document_management.value_objects import (
    DocumentChanges,
    serialize_tags,
    tags_match,
)

from .sql_models import DocumentRecord
from .storage_errors import sqlalchemy_errors

logger = logging.getLogger(__name__)


class SqlDocumentRepository(IDocumentRepository):
    """
    Relational implementation of IDocumentRepository.

    Driver exceptions leave this class as StorageError subclasses.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize the repository.

        Args:
            session_factory: sessionmaker bound to the application engine
        """
        self._session_factory = session_factory

    def create(self, document: Document) -> Document:
        with sqlalchemy_errors(), self._session_factory() as session:
            record = DocumentRecord.from_entity(document)
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.debug(f"Inserted document {record.id} ({record.filename})")
            return record.to_entity()

    def find_by_id(self, document_id: int) -> Optional[Document]:
        with sqlalchemy_errors(), self._session_factory() as session:
            record = session.get(DocumentRecord, document_id)
            return record.to_entity() if record else None

    def find_all(self) -> List[Document]:
        with sqlalchemy_errors(), self._session_factory() as session:
            return [record.to_entity() for record in self._all_records(session)]

    def update(self, document_id: int, changes: DocumentChanges) -> Optional[Document]:
        """
        Apply non-empty fields of the change set.

        An empty change set is a read: the row is not written.
        """
        with sqlalchemy_errors(), self._session_factory() as session:
            record = session.get(DocumentRecord, document_id)
            if record is None:
                return None
            if changes.is_empty():
                return record.to_entity()

            record.metadata_tags = serialize_tags(changes.tags)
            if changes.updated_at is not None:
                record.updated_at = changes.updated_at
            session.commit()
            session.refresh(record)
            return record.to_entity()

    def delete(self, document_id: int) -> Optional[Document]:
        with sqlalchemy_errors(), self._session_factory() as session:
            record = session.get(DocumentRecord, document_id)
            if record is None:
                return None
            snapshot = record.to_entity()
            session.delete(record)
            session.commit()
            return snapshot

    def find_by_tags(self, search_tags: Sequence[str]) -> List[Document]:
        """
        Tags are stored as a JSON text column, so matching happens here
        rather than in SQL.
        """
        with sqlalchemy_errors(), self._session_factory() as session:
            documents = [record.to_entity() for record in self._all_records(session)]
        return [document for document in documents if tags_match(document.tags, search_tags)]

    @staticmethod
    def _all_records(session: Session) -> List[DocumentRecord]:
        return list(session.scalars(select(DocumentRecord).order_by(DocumentRecord.id)))
