"""
Document Service

Application service exposing the document and download-link operations to
the API layer. Each operation takes already-validated primitive inputs and
returns an OperationResult built by the boundary combinator.
"""

from typing import BinaryIO, List, Optional

from docvault.domain.document_management.services import DocumentManager
from docvault.domain.download_tokens.services import DownloadTokenManager

from .boundary import OperationResult, execute


def _serialize_documents(documents) -> List[dict]:
    return [document.to_dict() for document in documents]


class DocumentService:
    """
    Application service for document operations.

    Responsibilities:
    - Delegate to DocumentManager / DownloadTokenManager
    - Shape success payloads
    - Route every outcome through execute() so status codes are decided
      in one place
    """

    def __init__(self, document_manager: DocumentManager, token_manager: DownloadTokenManager):
        """
        Initialize Document Service with dependencies.

        Args:
            document_manager: Domain service for the document lifecycle
            token_manager: Domain service for download tokens
        """
        self.document_manager = document_manager
        self.token_manager = token_manager

    def upload_document(
        self,
        content: BinaryIO,
        mime_type: str,
        size: int,
        original_filename: str,
        tags: Optional[List[str]] = None,
    ) -> OperationResult:
        """Upload a PDF. Responds 201 with the stored document's summary."""

        def serialize(document):
            return {
                "id": document.id,
                "filename": document.filename,
                "original_filename": document.original_filename,
                "file_size": document.file_size,
                "tags": list(document.tags),
                "created_at": document.created_at.isoformat() if document.created_at else None,
            }

        return execute(
            "upload_document",
            lambda: self.document_manager.upload(content, mime_type, size, original_filename, tags),
            success_status=201,
            message="Document uploaded successfully",
            serializer=serialize,
        )

    def list_documents(self) -> OperationResult:
        return execute(
            "list_documents",
            self.document_manager.list_documents,
            serializer=_serialize_documents,
        )

    def get_document(self, document_id: int) -> OperationResult:
        return execute(
            "get_document",
            lambda: self.document_manager.get_document(document_id),
            serializer=lambda document: document.to_dict(),
        )

    def update_document(self, document_id: int, tags: Optional[List[str]] = None) -> OperationResult:
        """Update a document's tags. Omitted tags leave the record untouched."""
        return execute(
            "update_document",
            lambda: self.document_manager.update_tags(document_id, tags),
            message="Document updated successfully",
            serializer=lambda document: document.to_dict(),
        )

    def delete_document(self, document_id: int) -> OperationResult:
        return execute(
            "delete_document",
            lambda: self.document_manager.delete_document(document_id),
            message="Document deleted successfully",
            serializer=lambda document: {"id": document.id, "filename": document.filename},
        )

    def search_documents(self, tags: Optional[List[str]]) -> OperationResult:
        """Search documents by tag (case-insensitive, partial, OR)."""
        search_tags = list(tags or [])

        def serialize(documents):
            return {
                "documents": _serialize_documents(documents),
                "count": len(documents),
                "search_tags": search_tags,
            }

        result = execute(
            "search_documents",
            lambda: self.document_manager.search_by_tags(search_tags),
            serializer=serialize,
        )
        if result.success:
            result.message = f"Found {result.payload['count']} document(s) matching the search criteria"
        return result

    def generate_download_link(self, document_id: int) -> OperationResult:
        return execute(
            "generate_download_link",
            lambda: self.token_manager.issue(document_id),
            message="Download link generated successfully",
            serializer=lambda link: link.to_dict(),
        )

    def download_by_token(self, token: str) -> OperationResult:
        """
        Consume a download token.

        On success the payload is the DocumentDownload itself; the API layer
        streams the file from it.
        """
        return execute(
            "download_by_token",
            lambda: self.token_manager.consume(token),
        )
