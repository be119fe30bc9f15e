"""
API Models for request/response Swagger documentation
"""

from flask_restx import fields, reqparse
from werkzeug.datastructures import FileStorage

from docvault.api.v1 import api

# =============================================================================
# Request Models
# =============================================================================

upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    "file", location="files", type=FileStorage, required=False, help="PDF file to upload"
)
upload_parser.add_argument(
    "tags", location="form", action="append", required=False,
    help="Metadata tag (repeat the field for several tags)",
)

tags_request = api.model(
    "TagsRequest",
    {
        "tags": fields.List(
            fields.String,
            description="Metadata tags",
            example=["invoice", "2024"],
        )
    },
)

# =============================================================================
# Response Models
# =============================================================================

document_model = api.model(
    "Document",
    {
        "id": fields.Integer(description="Document identifier"),
        "filename": fields.String(description="Stored filename"),
        "original_filename": fields.String(description="Filename supplied at upload"),
        "file_path": fields.String(description="Path relative to the upload directory"),
        "file_size": fields.Integer(description="Size in bytes"),
        "tags": fields.List(fields.String, description="Metadata tags"),
        "created_at": fields.DateTime(description="Creation time (UTC)"),
        "updated_at": fields.DateTime(description="Last update time (UTC)"),
    },
)

document_response = api.model(
    "DocumentResponse",
    {
        "success": fields.Boolean(example=True),
        "message": fields.String(description="Human-readable outcome"),
        "data": fields.Nested(document_model),
    },
)

document_list_response = api.model(
    "DocumentListResponse",
    {
        "success": fields.Boolean(example=True),
        "data": fields.List(fields.Nested(document_model)),
    },
)

search_result = api.model(
    "SearchResult",
    {
        "documents": fields.List(fields.Nested(document_model)),
        "count": fields.Integer(description="Number of matching documents"),
        "search_tags": fields.List(fields.String, description="Tags searched for"),
    },
)

search_response = api.model(
    "SearchResponse",
    {
        "success": fields.Boolean(example=True),
        "message": fields.String(),
        "data": fields.Nested(search_result),
    },
)

download_link = api.model(
    "DownloadLink",
    {
        "download_url": fields.String(description="Single-use download URL"),
        "token": fields.String(description="Download token"),
        "expires_at": fields.DateTime(description="Expiry time (UTC)"),
        "expires_in_minutes": fields.Integer(description="Link lifetime"),
        "document_id": fields.Integer(),
        "original_filename": fields.String(),
    },
)

download_link_response = api.model(
    "DownloadLinkResponse",
    {
        "success": fields.Boolean(example=True),
        "message": fields.String(),
        "data": fields.Nested(download_link),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "success": fields.Boolean(example=False),
        "error": fields.String(
            description="Error kind",
            enum=["bad_request", "not_found", "conflict", "unavailable", "internal_error"],
        ),
        "message": fields.String(description="Human-readable error message"),
    },
)
