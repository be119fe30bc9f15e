"""
Document Management Domain

Handles document records, their tags, and tag-based lookup.
"""

from .entities import Document
from .repositories import IDocumentRepository
from .services import DocumentManager
from .value_objects import DocumentChanges, SearchTags, deserialize_tags, serialize_tags, tags_match

__all__ = [
    "Document",
    "DocumentChanges",
    "DocumentManager",
    "IDocumentRepository",
    "SearchTags",
    "deserialize_tags",
    "serialize_tags",
    "tags_match",
]
