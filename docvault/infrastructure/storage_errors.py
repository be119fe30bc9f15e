"""
Storage Error Translation

Converts driver exceptions (SQLAlchemy, redis-py) into the storage-layer
error vocabulary. Repository implementations wrap every driver call with
one of the context managers below, so nothing outside this package ever
sees a driver exception.
"""

from contextlib import contextmanager
from typing import Iterator

from redis import exceptions as redis_exceptions
from sqlalchemy import exc as sa_exc

from docvault.domain.errors import (
    ConnectionFailure,
    ConstraintViolation,
    StorageError,
    StorageTimeout,
    UnknownStorageError,
)

_TIMEOUT_MARKERS = ("timeout", "timed out", "database is locked")
_CONNECTION_MARKERS = ("connect", "unable to open database", "server closed", "network")


def _constraint_name(error: sa_exc.IntegrityError) -> str:
    diag = getattr(error.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name
    # SQLite only reports the failing columns, e.g. "UNIQUE constraint failed: t.c"
    message = str(error.orig)
    if "constraint failed:" in message:
        return message.split("constraint failed:", 1)[1].strip()
    return "unknown"


def from_sqlalchemy_error(error: sa_exc.SQLAlchemyError) -> StorageError:
    """
    Classify a SQLAlchemy exception.

    Returns:
        The matching StorageError
    """
    message = str(error)
    # Match on the driver message only; the rendered SQL is noise.
    lowered = str(getattr(error, "orig", None) or error).lower()

    if isinstance(error, sa_exc.IntegrityError):
        return ConstraintViolation(_constraint_name(error), message)
    if isinstance(error, sa_exc.TimeoutError):
        return StorageTimeout(message)
    if isinstance(error, sa_exc.DisconnectionError) or getattr(error, "connection_invalidated", False):
        return ConnectionFailure(message)
    if isinstance(error, sa_exc.OperationalError):
        if any(marker in lowered for marker in _TIMEOUT_MARKERS):
            return StorageTimeout(message)
        if any(marker in lowered for marker in _CONNECTION_MARKERS):
            return ConnectionFailure(message)
    return UnknownStorageError(message)


def from_redis_error(error: redis_exceptions.RedisError) -> StorageError:
    """
    Classify a redis-py exception.

    redis.TimeoutError is checked first because it is raised for socket
    timeouts while ConnectionError covers refused/reset connections.
    """
    message = str(error) or type(error).__name__
    if isinstance(error, redis_exceptions.TimeoutError):
        return StorageTimeout(message)
    if isinstance(error, redis_exceptions.ConnectionError):
        return ConnectionFailure(message)
    return UnknownStorageError(message)


@contextmanager
def sqlalchemy_errors() -> Iterator[None]:
    """Raise SQLAlchemy exceptions as StorageError."""
    try:
        yield
    except sa_exc.SQLAlchemyError as e:
        raise from_sqlalchemy_error(e) from e


@contextmanager
def redis_errors() -> Iterator[None]:
    """Raise redis-py exceptions as StorageError."""
    try:
        yield
    except redis_exceptions.RedisError as e:
        raise from_redis_error(e) from e
