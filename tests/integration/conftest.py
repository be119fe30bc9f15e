"""
Integration fixtures: an in-memory SQLite database shared through a
StaticPool, and a temporary upload directory.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docvault.infrastructure.local_file_storage_repository import LocalFileStorageRepository
from docvault.infrastructure.sql_document_repository import SqlDocumentRepository
from docvault.infrastructure.sql_download_token_repository import SqlDownloadTokenRepository
from docvault.infrastructure.sql_models import Base


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def sql_document_repository(session_factory):
    return SqlDocumentRepository(session_factory)


@pytest.fixture
def sql_token_repository(session_factory):
    return SqlDownloadTokenRepository(session_factory)


@pytest.fixture
def local_storage(tmp_path):
    return LocalFileStorageRepository(str(tmp_path / "uploads"))
