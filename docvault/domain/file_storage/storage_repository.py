"""
File Storage Repository Interface

Abstract interface for physical file storage operations.
This abstraction lets the document and download-token services stay
infrastructure-agnostic: they name files by a path relative to the storage
root and never touch the filesystem directly.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional


class IFileStorageRepository(ABC):
    """
    Unified interface for file storage operations.

    Contract Guarantees:
    - File paths are relative to the storage root
    - delete() and exists() are idempotent and never fail for missing files
    - save() creates parent directories if needed

    Implementation Requirements:
    - save(): Must raise OSError (or a subclass) when the write fails
    - delete(): Must succeed even if file doesn't exist (idempotent)
    - exists(): Must never raise exceptions for invalid paths
    - get_size(): Must return None for non-existent files or directories
    """

    @abstractmethod
    def ensure_directory(self) -> None:
        """
        Make sure the storage root exists.

        Raises:
            OSError: If the directory cannot be created
        """
        pass  # pragma: no cover

    @abstractmethod
    def save(self, file_path: str, content: BinaryIO) -> bool:
        """
        Save file content to storage.

        Stores the binary content at the specified path. If the file already
        exists, it will be overwritten.

        Args:
            file_path: Relative path for the file (e.g., '1718000000000-a1b2c3.pdf')
            content: Binary file content as a file-like object

        Returns:
            True if the file was successfully saved

        Raises:
            ValueError: If file_path is empty
            OSError: If there are I/O errors during the operation
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, file_path: str) -> bool:
        """
        Delete a file from storage.

        Deleting a non-existent file returns True without error.

        Raises:
            OSError: If the file exists but cannot be removed
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, file_path: str) -> bool:
        """Check if a regular file exists at the specified path."""
        pass  # pragma: no cover

    @abstractmethod
    def resolve_path(self, file_path: str) -> Path:
        """
        Absolute location of a stored file, for streaming it to a client.

        Args:
            file_path: Relative path to the file

        Returns:
            Absolute Path (the file may or may not exist)
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_size(self, file_path: str) -> Optional[int]:
        """
        Get the size of a file in bytes.

        Returns:
            File size in bytes, or None if the file doesn't exist
        """
        pass  # pragma: no cover
