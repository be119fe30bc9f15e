"""
File Storage Domain

Contract for physical storage of uploaded document bytes.
"""

from .storage_repository import IFileStorageRepository

__all__ = ["IFileStorageRepository"]
