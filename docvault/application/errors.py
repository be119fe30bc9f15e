"""
Transport Errors

Application-layer errors that bridge domain errors with API responses.
This is the only module that decides HTTP status codes.
"""

from typing import Any, Dict

from docvault.domain.errors import (
    DocumentNotFound,
    DomainError,
    DownloadTokenAlreadyUsed,
    DownloadTokenExpired,
    DownloadTokenInvalid,
    FileNotFound,
    FileTooLarge,
    InvalidFileType,
    InvalidSearchTags,
    ServiceUnavailable,
    ServiceUnknown,
)

SERVICE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class TransportError(Exception):
    """
    Base transport error.

    Carries the message shown to API clients and a short machine-readable
    kind used in the response body.
    """

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "success": False,
            "error": self.kind,
            "message": self.message,
        }


class BadRequest(TransportError):
    kind = "bad_request"


class NotFound(TransportError):
    kind = "not_found"


class Conflict(TransportError):
    kind = "conflict"


class Unavailable(TransportError):
    kind = "unavailable"


class InternalError(TransportError):
    kind = "internal_error"


_NOT_FOUND = (DocumentNotFound, FileNotFound, DownloadTokenExpired, DownloadTokenInvalid)
_BAD_REQUEST = (InvalidFileType, FileTooLarge, InvalidSearchTags)


def map_domain_error(error: DomainError) -> TransportError:
    """
    Translate a domain error into a transport error.

    ServiceUnavailable is reported with a generic message so the failing
    operation is not exposed to clients.

    Raises:
        TypeError: If error is not one of the known domain errors
    """
    if isinstance(error, _NOT_FOUND):
        return NotFound(error.message)
    if isinstance(error, _BAD_REQUEST):
        return BadRequest(error.message)
    if isinstance(error, DownloadTokenAlreadyUsed):
        return Conflict(error.message)
    if isinstance(error, ServiceUnavailable):
        return Unavailable(SERVICE_UNAVAILABLE_MESSAGE)
    if isinstance(error, ServiceUnknown):
        return InternalError(error.message)
    raise TypeError(f"Unmapped domain error: {type(error).__name__}")


_STATUS_CODES = {
    BadRequest: 400,
    NotFound: 404,
    Conflict: 409,
    Unavailable: 503,
    InternalError: 500,
}


def status_code_for(error: TransportError) -> int:
    """
    HTTP status code for a transport error.

    Raises:
        TypeError: If error is not one of the known transport errors
    """
    try:
        return _STATUS_CODES[type(error)]
    except KeyError:
        raise TypeError(f"Unmapped transport error: {type(error).__name__}") from None
