"""
Unit tests for DownloadTokenManager: issuing links and the single-use,
time-boxed consumption rules.
"""

from datetime import timedelta
from pathlib import Path

import pytest

from docvault.domain.errors import (
    ConnectionFailure,
    DocumentNotFound,
    DownloadTokenAlreadyUsed,
    DownloadTokenExpired,
    DownloadTokenInvalid,
    FileNotFound,
    ServiceUnavailable,
    StorageTimeout,
    UnknownStorageError,
)
from tests.fixtures import pdf_stream


@pytest.fixture
def document(document_manager):
    return document_manager.upload(pdf_stream(), "application/pdf", 1024, "contract.pdf", ["legal"])


@pytest.fixture
def link(token_manager, document):
    return token_manager.issue(document.id)


class TestIssue:

    def test_issues_link_for_existing_document(self, token_manager, token_repository,
                                               document, clock):
        link = token_manager.issue(document.id)

        assert len(link.token) == 64
        assert link.expires_at == clock.now + timedelta(minutes=15)
        assert link.expires_in_minutes == 15
        assert link.download_url == f"/api/v1/documents/download/{link.token}"
        assert link.document.id == document.id
        assert token_repository.get(link.token).used_at is None

    def test_custom_ttl(self, token_manager, document, clock):
        link = token_manager.issue(document.id, ttl_minutes=1)

        assert link.expires_at == clock.now + timedelta(minutes=1)
        assert link.expires_in_minutes == 1

    def test_every_issue_creates_a_new_token(self, token_manager, token_repository, document):
        first = token_manager.issue(document.id)
        second = token_manager.issue(document.id)

        assert first.token != second.token
        assert token_repository.count() == 2

    def test_missing_document_creates_no_token(self, token_manager, token_repository):
        with pytest.raises(DocumentNotFound):
            token_manager.issue(404)
        assert token_repository.count() == 0

    def test_token_store_failure(self, token_manager, token_repository, document):
        token_repository.fail_on("create", StorageTimeout("slow"))

        with pytest.raises(ServiceUnavailable):
            token_manager.issue(document.id)

    def test_link_to_dict(self, link, document):
        data = link.to_dict()

        assert set(data) == {
            "download_url", "token", "expires_at", "expires_in_minutes",
            "document_id", "original_filename",
        }
        assert data["document_id"] == document.id
        assert data["original_filename"] == "contract.pdf"


class TestConsume:

    def test_first_consumption_succeeds(self, token_manager, token_repository, link,
                                        document, clock):
        download = token_manager.consume(link.token)

        assert download.document.id == document.id
        assert download.file_path == document.file_path
        assert download.absolute_path == Path("/uploads") / document.file_path
        assert token_repository.get(link.token).used_at == clock.now

    def test_second_consumption_is_rejected(self, token_manager, link):
        token_manager.consume(link.token)

        with pytest.raises(DownloadTokenAlreadyUsed) as exc_info:
            token_manager.consume(link.token)
        assert exc_info.value.message == "Download token has already been used"

    def test_unknown_token(self, token_manager):
        with pytest.raises(DownloadTokenInvalid) as exc_info:
            token_manager.consume("f" * 64)
        assert exc_info.value.message == "Invalid download token"

    def test_just_before_expiry_succeeds(self, token_manager, link, clock):
        clock.advance(minutes=15, microseconds=-1)

        token_manager.consume(link.token)

    def test_at_expiry_is_rejected(self, token_manager, token_repository, link, clock):
        clock.advance(minutes=15)

        with pytest.raises(DownloadTokenExpired) as exc_info:
            token_manager.consume(link.token)

        assert exc_info.value.message == "Download token has expired"
        assert token_repository.get(link.token).used_at is None

    def test_expiry_is_rechecked_after_lookup(self, token_manager, token_repository, link, clock):
        """
        A repository that returns an expired token (e.g. clock skew between
        the store and the service) must still be refused.
        """
        stale = token_repository.get(link.token)
        token_repository.find_valid_token = lambda token, now: stale
        clock.advance(hours=1)

        with pytest.raises(DownloadTokenExpired):
            token_manager.consume(link.token)

    def test_used_and_expired_reports_expired(self, token_manager, link, clock):
        token_manager.consume(link.token)
        clock.advance(hours=1)

        with pytest.raises(DownloadTokenExpired):
            token_manager.consume(link.token)

    def test_deleted_document(self, token_manager, document_manager, token_repository,
                              link, document):
        document_manager.delete_document(document.id)

        with pytest.raises(DocumentNotFound):
            token_manager.consume(link.token)
        assert token_repository.get(link.token).used_at is None

    def test_missing_file(self, token_manager, storage_repository, token_repository,
                          link, document):
        storage_repository.files.clear()

        with pytest.raises(FileNotFound) as exc_info:
            token_manager.consume(link.token)

        assert exc_info.value.message == f"File not found: {document.file_path}"
        assert token_repository.get(link.token).used_at is None

    def test_lookup_failure(self, token_manager, token_repository, link):
        token_repository.fail_on("find_valid_token", ConnectionFailure("down"))

        with pytest.raises(ServiceUnavailable):
            token_manager.consume(link.token)

    def test_mark_used_failure_still_serves_the_file(self, token_manager, token_repository,
                                                     link, caplog):
        token_repository.fail_on("mark_used", UnknownStorageError("write failed"))

        download = token_manager.consume(link.token)

        assert download.document is not None
        assert "write failed" in caplog.text

    def test_lost_race_is_already_used(self, token_manager, token_repository, link, clock):
        """Another consumer marked the token between lookup and mark."""
        original_find = token_repository.find_valid_token

        def find_then_consume_elsewhere(token, now):
            found = original_find(token, now)
            token_repository.get(token).used_at = now
            return found

        token_repository.find_valid_token = find_then_consume_elsewhere

        with pytest.raises(DownloadTokenAlreadyUsed):
            token_manager.consume(link.token)
