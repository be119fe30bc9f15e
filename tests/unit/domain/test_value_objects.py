"""
Unit tests for document and download-token value objects and entities.
"""

import re
from datetime import datetime, timedelta

import pytest

from docvault.domain.document_management import (
    Document,
    DocumentChanges,
    SearchTags,
    deserialize_tags,
    serialize_tags,
    tags_match,
)
from docvault.domain.download_tokens import DownloadToken, TokenState
from docvault.domain.errors import InvalidSearchTags

NOW = datetime(2024, 1, 15, 12, 0, 0)


class TestTagsMatch:

    @pytest.mark.parametrize("document_tags, search_tags, expected", [
        (["invoice"], ["INV"], True),
        (["Invoice"], ["invoice"], True),
        (["report", "monthly"], ["2024"], False),
        (["fy-2024"], ["2024"], True),
        (["alpha"], ["beta", "alph"], True),
        ([], ["anything"], False),
        (["inv"], ["invoice"], False),
    ])
    def test_partial_case_insensitive_or_matching(self, document_tags, search_tags, expected):
        assert tags_match(document_tags, search_tags) is expected

    def test_search_tags_value_object_matches_the_same_way(self):
        assert SearchTags.from_list(["INV"]).matches(["invoice"])


class TestSearchTags:

    @pytest.mark.parametrize("tags", [None, [], ()])
    def test_at_least_one_tag_is_required(self, tags):
        with pytest.raises(InvalidSearchTags) as exc_info:
            SearchTags.from_list(tags)
        assert exc_info.value.message == "At least one tag is required for search"

    def test_keeps_tag_order(self):
        assert SearchTags.from_list(["b", "a"]).tags == ("b", "a")


class TestTagSerialization:

    def test_serialize_keeps_order(self):
        assert serialize_tags(["b", "a"]) == '["b", "a"]'

    def test_serialize_none_is_empty_array(self):
        assert serialize_tags(None) == "[]"

    @pytest.mark.parametrize("raw", [None, "", "not json", '{"a": 1}', "42"])
    def test_unreadable_tags_read_back_as_empty(self, raw):
        assert deserialize_tags(raw) == []

    def test_non_string_items_are_dropped(self):
        assert deserialize_tags('["a", 1, null, "b"]') == ["a", "b"]


class TestDocumentChanges:

    def test_omitted_tags_is_empty(self):
        assert DocumentChanges(updated_at=NOW).is_empty()

    def test_empty_list_is_a_change(self):
        assert not DocumentChanges(tags=[]).is_empty()


class TestDocument:

    def test_create_sets_timestamps_and_relative_path(self):
        document = Document.create("1700000000000-abc123.pdf", "report.pdf", 1024,
                                   tags=["x"], now=NOW)

        assert document.id is None
        assert document.file_path == "1700000000000-abc123.pdf"
        assert document.created_at == NOW
        assert document.updated_at == NOW
        assert document.tags == ["x"]

    def test_stored_filename_format(self):
        filename = Document.generate_stored_filename()

        assert re.fullmatch(r"\d{13}-[0-9a-f]{6}\.pdf", filename)

    def test_to_dict_uses_iso_timestamps(self):
        document = Document.create("f.pdf", "o.pdf", 1, now=NOW)

        data = document.to_dict()

        assert data["created_at"] == "2024-01-15T12:00:00"
        assert data["tags"] == []


class TestDownloadToken:

    def test_create_issues_64_hex_char_token(self):
        token = DownloadToken.create(document_id=1, ttl_minutes=15, now=NOW)

        assert re.fullmatch(r"[0-9a-f]{64}", token.token)
        assert token.expires_at == NOW + timedelta(minutes=15)
        assert token.used_at is None

    def test_tokens_are_unique(self):
        tokens = {DownloadToken.create(1, now=NOW).token for _ in range(50)}
        assert len(tokens) == 50

    def test_expiry_boundary_is_inclusive(self):
        token = DownloadToken.create(1, ttl_minutes=15, now=NOW)

        assert not token.is_expired(token.expires_at - timedelta(microseconds=1))
        assert token.is_expired(token.expires_at)

    def test_state_transitions(self):
        token = DownloadToken.create(1, ttl_minutes=15, now=NOW)

        assert token.state(NOW) == TokenState.ISSUED
        assert token.state(NOW + timedelta(minutes=15)) == TokenState.EXPIRED

        token.used_at = NOW
        assert token.state(NOW + timedelta(minutes=30)) == TokenState.CONSUMED

    def test_download_url(self):
        token = DownloadToken.create(1, now=NOW)

        assert token.generate_download_url() == f"/api/v1/documents/download/{token.token}"
        assert token.generate_download_url("https://files.example.com/dl/") == (
            f"https://files.example.com/dl/{token.token}"
        )

    def test_dict_round_trip_preserves_used_at(self):
        token = DownloadToken.create(7, now=NOW)
        token.used_at = NOW + timedelta(minutes=1)

        restored = DownloadToken.from_dict(token.to_dict())

        assert restored == token

    def test_remaining_seconds_never_negative(self):
        token = DownloadToken.create(1, ttl_minutes=1, now=NOW)

        assert token.get_remaining_seconds(NOW) == 60
        assert token.get_remaining_seconds(NOW + timedelta(hours=1)) == 0
