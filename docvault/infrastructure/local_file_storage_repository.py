"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
Uploaded PDFs are stored under a single upload directory and addressed by
their stored filename.
"""

from pathlib import Path
from typing import BinaryIO, Optional

from docvault.domain.file_storage.storage_repository import IFileStorageRepository


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Attributes:
        base_path: Upload directory; every file path is relative to it
    """

    CHUNK_SIZE = 8192

    def __init__(self, base_path: str = "./uploads"):
        """
        Initialize the local file storage repository.

        The directory itself is created lazily by ensure_directory().

        Args:
            base_path: Upload directory (default: ./uploads)
        """
        self.base_path = Path(base_path).resolve()

    def _full_path(self, file_path: str) -> Path:
        """
        Resolve a relative path under base_path.

        Raises:
            ValueError: If the path is empty or escapes base_path
        """
        if not file_path or not file_path.strip():
            raise ValueError("file_path cannot be empty")
        full_path = (self.base_path / file_path).resolve()
        if full_path != self.base_path and self.base_path not in full_path.parents:
            raise ValueError(f"file_path escapes storage root: {file_path}")
        return full_path

    def ensure_directory(self) -> None:
        """
        Ensure the upload directory exists.

        Raises:
            PermissionError: If insufficient permissions to create directory
            OSError: If directory creation fails for other reasons
        """
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(
                f"Failed to create storage directory: {self.base_path}"
            ) from e

    def save(self, file_path: str, content: BinaryIO) -> bool:
        """
        Save file content to storage, streaming it in chunks.

        Raises:
            ValueError: If file_path is empty or invalid
            OSError: If there are I/O errors during the operation
        """
        full_path = self._full_path(file_path)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(full_path, "wb") as f:
                while True:
                    chunk = content.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
        except PermissionError:
            raise
        except OSError as e:
            raise OSError(f"Failed to save file: {e}") from e

        return True

    def delete(self, file_path: str) -> bool:
        """
        Delete a file from storage.

        Idempotent: a missing file (or an invalid path) counts as deleted.

        Raises:
            PermissionError: If there are insufficient permissions to delete
            OSError: If there are I/O errors during the operation
        """
        try:
            full_path = self._full_path(file_path)
        except ValueError:
            return True

        if not full_path.is_file():
            return True

        try:
            full_path.unlink()
        except FileNotFoundError:
            pass
        except PermissionError:
            raise
        except OSError as e:
            raise OSError(f"Failed to delete file: {e}") from e

        return True

    def exists(self, file_path: str) -> bool:
        """Check if a regular file exists. Never raises."""
        try:
            return self._full_path(file_path).is_file()
        except (OSError, ValueError):
            return False

    def resolve_path(self, file_path: str) -> Path:
        return self._full_path(file_path)

    def get_size(self, file_path: str) -> Optional[int]:
        """Size in bytes, or None for missing files and directories."""
        try:
            full_path = self._full_path(file_path)
            if not full_path.is_file():
                return None
            return full_path.stat().st_size
        except (OSError, ValueError):
            return None
