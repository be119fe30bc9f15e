"""
SQL Table Mappings

SQLAlchemy declarative models for the documents and download_tokens tables,
plus conversions to and from the domain entities.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

from docvault.domain.document_management.entities import Document
from docvault.domain.document_management.value_objects import deserialize_tags, serialize_tags
from docvault.domain.download_tokens.entities import DownloadToken

Base = declarative_base()


class DocumentRecord(Base):
    __tablename__ = "documents"
    # Ids of deleted documents are never handed out again; tokens may still reference them.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(255), nullable=False, unique=True)
    original_filename = Column(String(255), nullable=False)
    file_path = Column(String(512), nullable=False)
    file_size = Column(Integer, nullable=False)
    metadata_tags = Column(Text, nullable=True)  # JSON array
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def to_entity(self) -> Document:
        return Document(
            id=self.id,
            filename=self.filename,
            original_filename=self.original_filename,
            file_path=self.file_path,
            file_size=self.file_size,
            tags=deserialize_tags(self.metadata_tags),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentRecord":
        return cls(
            filename=document.filename,
            original_filename=document.original_filename,
            file_path=document.file_path,
            file_size=document.file_size,
            metadata_tags=serialize_tags(document.tags),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )

    def __repr__(self):
        return f"<DocumentRecord(id={self.id}, filename='{self.filename}')>"


class DownloadTokenRecord(Base):
    __tablename__ = "download_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(128), nullable=False, unique=True, index=True)
    # Plain column: tokens outlive their document, and consuming one then
    # reports the document as missing.
    document_id = Column(Integer, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)

    def to_entity(self) -> DownloadToken:
        return DownloadToken(
            id=self.id,
            token=self.token,
            document_id=self.document_id,
            expires_at=self.expires_at,
            created_at=self.created_at,
            used_at=self.used_at,
        )

    @classmethod
    def from_entity(cls, token: DownloadToken) -> "DownloadTokenRecord":
        return cls(
            token=token.token,
            document_id=token.document_id,
            expires_at=token.expires_at,
            created_at=token.created_at,
            used_at=token.used_at,
        )

    def __repr__(self):
        return f"<DownloadTokenRecord(id={self.id}, token='{self.token[:8]}...')>"
