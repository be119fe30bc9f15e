"""
Application Layer

Orchestrates domain services and renders their outcomes for the API.
"""

from .boundary import OperationResult, execute
from .dependency_container import DependencyContainer, DependencyNotFoundError
from .document_service import DocumentService

__all__ = [
    "DependencyContainer",
    "DependencyNotFoundError",
    "DocumentService",
    "OperationResult",
    "execute",
]
