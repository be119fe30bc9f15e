"""
Database Configuration

Engine and session factory for the relational store. Mirrors the Redis
config module: init once at startup, then hand the session factory to the
SQL repositories.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docvault.infrastructure.sql_models import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for database_url.

    In-memory SQLite gets a StaticPool so every session shares the one
    connection that holds the schema.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def init_database(database_url: str) -> sessionmaker:
    """
    Create the engine, the tables and the session factory.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        sessionmaker bound to the new engine
    """
    global _engine

    _engine = build_engine(database_url)
    Base.metadata.create_all(bind=_engine)
    session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info(f"Database initialized ({_engine.url.render_as_string(hide_password=True)})")
    return session_factory


def database_health_check() -> bool:
    """Check that the database answers a trivial query."""
    if _engine is None:
        return False
    try:
        with _engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return False


def close_database() -> None:
    global _engine

    if _engine is not None:
        _engine.dispose()
    _engine = None
