"""
Error Handling Module

Defines the storage-layer and domain-layer error hierarchies and the
translation between them.

Storage errors are raised by repository implementations. They are
translated into domain errors exactly once, at the point where a domain
service calls a repository (see translate_storage_errors). Domain errors
are pure and have no external dependencies.
"""

from contextlib import contextmanager
from typing import Iterator


# ============================================================================
# Storage Layer Exceptions
# ============================================================================

class StorageError(Exception):
    """
    Base exception for all storage-layer failures.

    "Not found" for direct lookups is never a StorageError; repositories
    return None instead. Only token validity is reported as an error,
    because it is evaluated as part of the lookup predicate.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConnectionFailure(StorageError):
    """Raised when the backing store cannot be reached."""
    pass


class StorageTimeout(StorageError):
    """Raised when the backing store does not answer in time."""
    pass


class ConstraintViolation(StorageError):
    """Raised when a write violates a uniqueness or integrity constraint."""

    def __init__(self, constraint: str, message: str):
        super().__init__(message)
        self.constraint = constraint


class UnknownStorageError(StorageError):
    """Raised for any unclassified storage failure."""
    pass


class TokenNotFound(StorageError):
    """Raised when no download token matches the lookup."""

    def __init__(self, token: str):
        super().__init__("Download token not found")
        self.token = token


class TokenExpired(StorageError):
    """Raised when the matching download token is past its expiry."""

    def __init__(self, token: str):
        super().__init__("Download token expired")
        self.token = token


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class DocumentNotFound(DomainError):
    """Raised when a document id does not resolve to a stored document."""

    def __init__(self, document_id: int):
        super().__init__(f"Document with ID {document_id} not found")
        self.document_id = document_id


class FileNotFound(DomainError):
    """Raised when a document's backing file is missing from storage."""

    def __init__(self, file_path: str):
        super().__init__(f"File not found: {file_path}")
        self.file_path = file_path


class InvalidFileType(DomainError):
    """Raised when an upload is not a PDF."""
    pass


class FileTooLarge(DomainError):
    """Raised when an upload exceeds the configured maximum size."""

    def __init__(self, max_size: int, actual_size: int):
        super().__init__(f"File size {actual_size} exceeds maximum {max_size}")
        self.max_size = max_size
        self.actual_size = actual_size


class InvalidSearchTags(DomainError):
    """Raised when a tag search is requested without any tag."""
    pass


class DownloadTokenExpired(DomainError):
    """Raised when a download token is consumed at or after its expiry."""

    def __init__(self, token: str):
        super().__init__("Download token has expired")
        self.token = token


class DownloadTokenInvalid(DomainError):
    """Raised when a download token does not exist."""

    def __init__(self, token: str):
        super().__init__("Invalid download token")
        self.token = token


class DownloadTokenAlreadyUsed(DomainError):
    """Raised when a download token has already been consumed."""

    def __init__(self, token: str):
        super().__init__("Download token has already been used")
        self.token = token


class ServiceUnavailable(DomainError):
    """
    Infrastructure passthrough: the backing store is unreachable or slow.

    The operation name is kept for logging only and is never shown to
    API clients.
    """

    def __init__(self, operation: str, original_error: Exception = None):
        super().__init__(f"Service unavailable during {operation}", original_error)
        self.operation = operation


class ServiceUnknown(DomainError):
    """Infrastructure passthrough: an unclassified storage failure."""

    def __init__(self, operation: str, message: str, original_error: Exception = None):
        super().__init__(message, original_error)
        self.operation = operation


# ============================================================================
# Storage -> Domain translation
# ============================================================================

def map_storage_error(error: StorageError, operation: str) -> DomainError:
    """
    Translate a storage error into the domain vocabulary.

    Args:
        error: Storage error raised by a repository
        operation: Name of the service operation that made the call

    Returns:
        The matching DomainError

    Raises:
        TypeError: If error is not one of the known storage errors
    """
    if isinstance(error, TokenNotFound):
        return DownloadTokenInvalid(error.token)
    if isinstance(error, TokenExpired):
        return DownloadTokenExpired(error.token)
    if isinstance(error, (ConnectionFailure, StorageTimeout)):
        return ServiceUnavailable(operation, original_error=error)
    if isinstance(error, (ConstraintViolation, UnknownStorageError)):
        return ServiceUnknown(operation, error.message, original_error=error)
    raise TypeError(f"Unmapped storage error: {type(error).__name__}")


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """
    Run a repository call and raise any StorageError as a DomainError.

    Usage:
        with translate_storage_errors("get_document"):
            document = repository.find_by_id(document_id)
    """
    try:
        yield
    except StorageError as e:
        raise map_storage_error(e, operation) from e
