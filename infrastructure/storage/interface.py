"""
Storage Interface
=================

Abstract base class defining the contract for file storage operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


@dataclass
class StorageFile:
    """
    Represents a stored file with its metadata.

    Attributes:
        key: Unique identifier/path for the file
        url: Public or signed URL to access the file
        size: File size in bytes
        content_type: MIME type of the file
        bucket: Storage bucket/container name (optional)
    """

    key: str
    url: str
    size: int
    content_type: str
    bucket: Optional[str] = None


class StorageInterface(ABC):
    """
    Abstract interface for file storage operations.

    Concrete implementations:
        - LocalStorageAdapter: files under MEDIA_ROOT
        - S3StorageAdapter: AWS S3 / MinIO bucket
    """

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """
        Upload a file to storage.

        Args:
            file: Binary file object to upload
            path: Destination path/key in storage
            content_type: MIME type of the file

        Raises:
            StorageException: If upload fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a file. Returns False when it did not exist."""
        pass

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Get a URL to access the file."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass


class StorageException(Exception):
    """Base exception for storage operations."""

    pass
