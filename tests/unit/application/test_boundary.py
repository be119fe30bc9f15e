"""
Unit tests for execute() and OperationResult.
"""

import logging

from docvault.application.boundary import OperationResult, execute
from docvault.application.errors import BadRequest, InternalError, NotFound
from docvault.domain.errors import (
    ConnectionFailure,
    DocumentNotFound,
    InvalidFileType,
    ServiceUnavailable,
)


def _raise(error):
    def action():
        raise error
    return action


class TestExecute:

    def test_success_with_serializer(self):
        result = execute("op", lambda: [1, 2], message="done", serializer=len)

        assert result.success
        assert result.status_code == 200
        assert result.payload == 2
        assert result.message == "done"

    def test_custom_success_status(self):
        result = execute("op", lambda: "x", success_status=201)
        assert result.status_code == 201

    def test_domain_error_is_mapped(self):
        result = execute("get_document", _raise(DocumentNotFound(5)))

        assert not result.success
        assert result.status_code == 404
        assert isinstance(result.error, NotFound)
        assert result.message == "Document with ID 5 not found"

    def test_validation_errors_log_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="docvault.application.boundary"):
            execute("upload_document", _raise(InvalidFileType("Only PDF files are allowed")))

        assert all(record.levelno == logging.INFO for record in caplog.records)

    def test_infrastructure_errors_log_at_error(self, caplog):
        error = ServiceUnavailable("list_documents", ConnectionFailure("down"))

        with caplog.at_level(logging.INFO, logger="docvault.application.boundary"):
            result = execute("list_documents", _raise(error))

        assert result.status_code == 503
        assert any(record.levelno == logging.ERROR for record in caplog.records)

    def test_unexpected_exception_is_internal_error(self, caplog):
        result = execute("list_documents", _raise(RuntimeError("bug")))

        assert result.status_code == 500
        assert isinstance(result.error, InternalError)
        assert result.message == "Internal server error"
        assert "bug" in caplog.text


class TestOperationResult:

    def test_success_response_body(self):
        result = OperationResult(status_code=201, payload={"id": 1}, message="Document uploaded successfully")

        body, status = result.to_response()

        assert status == 201
        assert body == {"success": True, "data": {"id": 1}, "message": "Document uploaded successfully"}

    def test_success_without_message_omits_it(self):
        body, _ = OperationResult(status_code=200, payload=[]).to_response()
        assert body == {"success": True, "data": []}

    def test_failure_response_body(self):
        body, status = OperationResult.failure(BadRequest("No file provided")).to_response()

        assert status == 400
        assert body == {"success": False, "error": "bad_request", "message": "No file provided"}
