"""
SQL Download Token Repository Implementation

SQLAlchemy-backed implementation of IDownloadTokenRepository.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import sessionmaker

from docvault.domain.download_tokens.entities import DownloadToken
from docvault.domain.download_tokens.repositories import IDownloadTokenRepository
from docvault.domain.errors import TokenExpired, TokenNotFound

from .sql_models import DownloadTokenRecord
from .storage_errors import sqlalchemy_errors

logger = logging.getLogger(__name__)


class SqlDownloadTokenRepository(IDownloadTokenRepository):
    """
    Relational implementation of IDownloadTokenRepository.

    mark_used is a single conditional UPDATE, so concurrent consumers of
    the same token are serialized by the database.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, token: DownloadToken) -> DownloadToken:
        with sqlalchemy_errors(), self._session_factory() as session:
            record = DownloadTokenRecord.from_entity(token)
            session.add(record)
            session.commit()
            session.refresh(record)
            return record.to_entity()

    def find_valid_token(self, token: str, now: datetime) -> DownloadToken:
        """
        Look up an unexpired token.

        Raises:
            TokenNotFound: If no row has this token
            TokenExpired: If expires_at is not after now
        """
        with sqlalchemy_errors(), self._session_factory() as session:
            record = session.scalars(
                select(DownloadTokenRecord)
                .where(DownloadTokenRecord.token == token)
                .where(DownloadTokenRecord.expires_at > now)
            ).first()
            if record is not None:
                return record.to_entity()

            exists = session.scalar(
                select(DownloadTokenRecord.id).where(DownloadTokenRecord.token == token)
            )

        if exists is None:
            raise TokenNotFound(token)
        raise TokenExpired(token)

    def mark_used(self, token: str, used_at: datetime) -> bool:
        with sqlalchemy_errors(), self._session_factory() as session:
            result = session.execute(
                update(DownloadTokenRecord)
                .where(DownloadTokenRecord.token == token)
                .where(DownloadTokenRecord.used_at.is_(None))
                .values(used_at=used_at)
            )
            session.commit()
            claimed = result.rowcount == 1

        if not claimed:
            logger.debug(f"Token {token[:8]}... was already used or no longer exists")
        return claimed
