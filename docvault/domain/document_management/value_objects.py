"""
Document Management Value Objects

Immutable value objects for tag handling and partial updates.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from docvault.domain.errors import InvalidSearchTags


def serialize_tags(tags: Optional[Iterable[str]]) -> str:
    """Serialize tags as an ordered JSON array for storage."""
    return json.dumps(list(tags or []))


def deserialize_tags(raw: Optional[str]) -> List[str]:
    """
    Materialize tags from their stored form.

    Tags are non-critical metadata: a missing value, invalid JSON, or a JSON
    value that is not a list all read back as an empty list instead of
    raising. Non-string items are dropped.
    """
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [tag for tag in parsed if isinstance(tag, str)]


def tags_match(document_tags: Iterable[str], search_tags: Iterable[str]) -> bool:
    """
    Partial, case-insensitive tag matching with OR semantics.

    A document matches when any of its tags equals, or contains as a
    substring, any of the search tags. Both sides are case-folded.

    Example:
        >>> tags_match(["invoice"], ["INV"])
        True
        >>> tags_match(["report", "monthly"], ["2024"])
        False
    """
    folded_document_tags = [tag.lower() for tag in document_tags]
    for search_tag in search_tags:
        needle = search_tag.lower()
        for document_tag in folded_document_tags:
            if document_tag == needle or needle in document_tag:
                return True
    return False


@dataclass(frozen=True)
class SearchTags:
    """
    Value object representing a validated tag search.

    At least one tag is required.
    """
    tags: Tuple[str, ...]

    def __post_init__(self):
        if not self.tags:
            raise InvalidSearchTags("At least one tag is required for search")

    @classmethod
    def from_list(cls, tags: Optional[Iterable[str]]) -> "SearchTags":
        return cls(tuple(tags or ()))

    def matches(self, document_tags: Iterable[str]) -> bool:
        return tags_match(document_tags, self.tags)


@dataclass(frozen=True)
class DocumentChanges:
    """
    Partial update of a document.

    Fields left as None are not touched. updated_at is only applied when
    at least one other field is present.
    """
    tags: Optional[List[str]] = None
    updated_at: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.tags is None
