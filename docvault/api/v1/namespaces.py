"""
API Namespaces - Organized endpoint groups
"""

import os
from typing import List, Optional

from flask import current_app, request, send_file
from flask_restx import Namespace, Resource

from docvault.api.v1.models import (
    document_list_response,
    document_response,
    download_link_response,
    error_response,
    search_response,
    tags_request,
    upload_parser,
)
from docvault.application.boundary import OperationResult
from docvault.application.document_service import DocumentService
from docvault.application.errors import BadRequest

documents_ns = Namespace("documents", description="PDF document operations")

MAX_DOCUMENT_ID = 2**63 - 1


def _service() -> DocumentService:
    return current_app.container.resolve(DocumentService)


def _bad_request(message: str):
    return OperationResult.failure(BadRequest(message)).to_response()


def _parse_document_id(raw: str) -> Optional[int]:
    """Positive integer id that fits a signed 64-bit column, or None."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    document_id = int(raw)
    return document_id if 0 < document_id <= MAX_DOCUMENT_ID else None


def _is_string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _split_query_tags(values: List[str]) -> List[str]:
    """Accept both ?tags=a&tags=b and ?tags=a,b."""
    tags = []
    for value in values:
        tags.extend(part.strip() for part in value.split(","))
    return [tag for tag in tags if tag]


def _stream_size(stream) -> int:
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


# =============================================================================
# Documents Namespace
# =============================================================================


@documents_ns.route("/upload")
class DocumentUpload(Resource):
    """Upload a PDF document"""

    @documents_ns.doc("upload_document")
    @documents_ns.expect(upload_parser)
    @documents_ns.response(201, "Created", document_response)
    @documents_ns.response(400, "Bad Request", error_response)
    @documents_ns.response(503, "Service Unavailable", error_response)
    def post(self):
        """
        Upload a PDF document

        Multipart form with a `file` part (application/pdf) and optional
        repeated `tags` fields.
        """
        args = upload_parser.parse_args()
        upload = args.get("file")
        if upload is None or not upload.filename:
            return _bad_request("No file provided")

        tags = [tag.strip() for tag in (args.get("tags") or []) if tag and tag.strip()]
        size = _stream_size(upload.stream)

        result = _service().upload_document(
            content=upload.stream,
            mime_type=upload.mimetype,
            size=size,
            original_filename=upload.filename,
            tags=tags,
        )
        return result.to_response()


@documents_ns.route("/")
class DocumentList(Resource):
    """Document collection"""

    @documents_ns.doc("list_documents")
    @documents_ns.response(200, "Success", document_list_response)
    @documents_ns.response(503, "Service Unavailable", error_response)
    def get(self):
        """List all documents"""
        return _service().list_documents().to_response()


@documents_ns.route("/search")
class DocumentSearch(Resource):
    """Search documents by tag"""

    @documents_ns.doc("search_documents", params={"tags": "Tag to search for (repeatable or comma-separated)"})
    @documents_ns.response(200, "Success", search_response)
    @documents_ns.response(400, "Bad Request", error_response)
    def get(self):
        """
        Search documents by tags (query string)

        Matching is case-insensitive and partial; a document matches if
        any of its tags contains any of the search tags.
        """
        tags = _split_query_tags(request.args.getlist("tags"))
        return _service().search_documents(tags).to_response()

    @documents_ns.doc("search_documents_body")
    @documents_ns.expect(tags_request)
    @documents_ns.response(200, "Success", search_response)
    @documents_ns.response(400, "Bad Request", error_response)
    def post(self):
        """Search documents by tags (JSON body)"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _bad_request("Request body must be a JSON object")

        tags = data.get("tags")
        if tags is not None and not _is_string_list(tags):
            return _bad_request("tags must be an array of strings")

        return _service().search_documents(tags).to_response()


@documents_ns.route("/<string:document_id>")
@documents_ns.param("document_id", "The document identifier")
class DocumentItem(Resource):
    """Single document operations"""

    @documents_ns.doc("get_document")
    @documents_ns.response(200, "Success", document_response)
    @documents_ns.response(404, "Document Not Found", error_response)
    def get(self, document_id):
        """Get a document's metadata"""
        parsed_id = _parse_document_id(document_id)
        if parsed_id is None:
            return _bad_request("Invalid document ID")
        return _service().get_document(parsed_id).to_response()

    @documents_ns.doc("update_document")
    @documents_ns.expect(tags_request)
    @documents_ns.response(200, "Success", document_response)
    @documents_ns.response(400, "Bad Request", error_response)
    @documents_ns.response(404, "Document Not Found", error_response)
    def put(self, document_id):
        """
        Update a document's tags

        Omitting `tags` leaves the document unchanged; an empty list clears
        its tags.
        """
        parsed_id = _parse_document_id(document_id)
        if parsed_id is None:
            return _bad_request("Invalid document ID")

        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return _bad_request("Request body must be a JSON object")

        tags = data.get("tags")
        if tags is not None and not _is_string_list(tags):
            return _bad_request("tags must be an array of strings")

        return _service().update_document(parsed_id, tags).to_response()

    @documents_ns.doc("delete_document")
    @documents_ns.response(200, "Deleted")
    @documents_ns.response(404, "Document Not Found", error_response)
    def delete(self, document_id):
        """Delete a document and its file"""
        parsed_id = _parse_document_id(document_id)
        if parsed_id is None:
            return _bad_request("Invalid document ID")
        return _service().delete_document(parsed_id).to_response()


@documents_ns.route("/<string:document_id>/download-link")
@documents_ns.param("document_id", "The document identifier")
class DocumentDownloadLink(Resource):
    """Issue a download link"""

    @documents_ns.doc("generate_download_link")
    @documents_ns.response(200, "Success", download_link_response)
    @documents_ns.response(404, "Document Not Found", error_response)
    def post(self, document_id):
        """
        Generate a single-use download link

        The link expires after the configured number of minutes and can be
        used once.
        """
        parsed_id = _parse_document_id(document_id)
        if parsed_id is None:
            return _bad_request("Invalid document ID")
        return _service().generate_download_link(parsed_id).to_response()


@documents_ns.route("/download/<string:token>")
@documents_ns.param("token", "The download token")
class DocumentDownload(Resource):
    """Download a document by token"""

    @documents_ns.doc("download_by_token")
    @documents_ns.response(200, "PDF content")
    @documents_ns.response(404, "Token or Document Not Found", error_response)
    @documents_ns.response(409, "Token Already Used", error_response)
    def get(self, token):
        """Download a PDF using a single-use token"""
        if not token or not token.strip():
            return _bad_request("Invalid or missing token")

        result = _service().download_by_token(token)
        if not result.success:
            return result.to_response()

        download = result.payload
        current_app.logger.info(f"Serving document {download.document.id} for token {token[:8]}...")
        return send_file(
            download.absolute_path,
            as_attachment=True,
            download_name=download.document.original_filename,
            mimetype="application/pdf",
        )
