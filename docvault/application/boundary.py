"""
Boundary Orchestration

Runs a domain operation and renders its outcome for the transport layer:
a success status with a payload, or a TransportError-derived status with
a message. Every document and token operation goes through execute().
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from docvault.domain.errors import DomainError

from .errors import (
    INTERNAL_ERROR_MESSAGE,
    InternalError,
    TransportError,
    map_domain_error,
    status_code_for,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class OperationResult:
    """
    Transport-ready outcome of a service operation.

    Exactly one of payload (on success) or error (on failure) is meaningful.
    """
    status_code: int
    payload: Any = None
    message: Optional[str] = None
    error: Optional[TransportError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_response(self) -> Tuple[Dict[str, Any], int]:
        """
        Render as a (body, status) pair for a flask-restx resource.

        Success bodies are {"success": true, "message": ..., "data": ...};
        error bodies come from TransportError.to_dict().
        """
        if self.error is not None:
            return self.error.to_dict(), self.status_code
        body = {"success": True, "data": self.payload}
        if self.message:
            body["message"] = self.message
        return body, self.status_code

    @classmethod
    def failure(cls, error: TransportError) -> "OperationResult":
        return cls(status_code=status_code_for(error), message=error.message, error=error)


def execute(
    operation: str,
    action: Callable[[], T],
    success_status: int = 200,
    message: Optional[str] = None,
    serializer: Optional[Callable[[T], Any]] = None,
) -> OperationResult:
    """
    Run a domain action and translate its outcome.

    Args:
        operation: Operation name, used in log lines
        action: Zero-argument callable performing the domain work
        success_status: Status code reported on success
        message: Optional human-readable success message
        serializer: Optional conversion of the action's result to a payload

    Returns:
        OperationResult for the transport layer
    """
    try:
        result = action()
    except DomainError as e:
        error = map_domain_error(e)
        if isinstance(error, InternalError) or e.original_error is not None:
            logger.error(f"{operation} failed: {e}", exc_info=e.original_error is not None)
        else:
            logger.info(f"{operation} rejected: {e}")
        return OperationResult.failure(error)
    except Exception as e:
        logger.exception(f"Unexpected error in {operation}: {e}")
        return OperationResult.failure(InternalError(INTERNAL_ERROR_MESSAGE))

    payload = serializer(result) if serializer else result
    return OperationResult(status_code=success_status, payload=payload, message=message)
