"""
Token Repository Factory

Chooses the download-token store. Documents always live in the relational
database; tokens live there too unless TOKEN_STORE=redis.
"""

import logging
from typing import Callable

import redis
from sqlalchemy.orm import sessionmaker

from docvault.domain.download_tokens.repositories import IDownloadTokenRepository

from .redis_download_token_repository import RedisDownloadTokenRepository
from .sql_download_token_repository import SqlDownloadTokenRepository

logger = logging.getLogger(__name__)

SQL_TOKEN_STORE = "sql"
REDIS_TOKEN_STORE = "redis"


class TokenRepositoryFactory:
    """Factory that returns the configured download-token repository."""

    @staticmethod
    def create(
        token_store: str,
        session_factory: sessionmaker,
        redis_client_provider: Callable[[], redis.Redis],
        retention_seconds: int = 86400,
    ) -> IDownloadTokenRepository:
        """
        Create the token repository for token_store.

        Args:
            token_store: "sql" or "redis"
            session_factory: sessionmaker for the SQL store
            redis_client_provider: Called only when the Redis store is chosen
            retention_seconds: Redis key retention past token expiry

        Raises:
            ValueError: If token_store is not a known store
        """
        if token_store == SQL_TOKEN_STORE:
            logger.info("Token repository: relational database")
            return SqlDownloadTokenRepository(session_factory)
        if token_store == REDIS_TOKEN_STORE:
            logger.info("Token repository: Redis")
            return RedisDownloadTokenRepository(redis_client_provider(), retention_seconds)
        raise ValueError(
            f"Unknown TOKEN_STORE '{token_store}', expected '{SQL_TOKEN_STORE}' or '{REDIS_TOKEN_STORE}'"
        )
