"""
Infrastructure Layer

Concrete repository implementations: local filesystem storage, SQLAlchemy
document and token repositories, and the Redis token repository.
"""

from .local_file_storage_repository import LocalFileStorageRepository
from .redis_download_token_repository import RedisDownloadTokenRepository
from .sql_document_repository import SqlDocumentRepository
from .sql_download_token_repository import SqlDownloadTokenRepository
from .token_repository_factory import TokenRepositoryFactory

__all__ = [
    "LocalFileStorageRepository",
    "RedisDownloadTokenRepository",
    "SqlDocumentRepository",
    "SqlDownloadTokenRepository",
    "TokenRepositoryFactory",
]
