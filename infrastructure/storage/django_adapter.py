"""
Django Storage Adapter
======================

Implementation of StorageInterface on top of any Django ``Storage`` backend.
Subclasses only choose which backend to wrap.
"""

import logging
from typing import BinaryIO, Optional

from django.conf import settings
from django.core.files.storage import FileSystemStorage, Storage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)


class DjangoStorageAdapter(StorageInterface):
    backend_name = "django"

    def __init__(self, storage: Storage, bucket: Optional[str] = None):
        self.storage = storage
        self.bucket = bucket

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            saved_path = self.storage.save(path, file)
            size = self.storage.size(saved_path)
            url = self.storage.url(saved_path)

            logger.info(f"Uploaded file to {self.backend_name} storage: {saved_path} ({size} bytes)")

            return StorageFile(key=saved_path, url=url, size=size, content_type=content_type, bucket=self.bucket)

        except Exception as e:
            logger.error(f"Failed to upload file to {self.backend_name} storage: {path}. Error: {str(e)}")
            raise StorageException(f"Upload failed: {str(e)}") from e

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"File not found, cannot delete: {key}")
                return False
            self.storage.delete(key)
            logger.info(f"Deleted file: {key}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete file: {key}. Error: {str(e)}")
            raise StorageException(f"Deletion failed: {str(e)}") from e

    def get_url(self, key: str) -> str:
        try:
            return self.storage.url(key)
        except Exception as e:
            logger.error(f"Failed to generate URL for key: {key}. Error: {str(e)}")
            raise StorageException(f"URL generation failed: {str(e)}") from e

    def exists(self, key: str) -> bool:
        return self.storage.exists(key)


class LocalStorageAdapter(DjangoStorageAdapter):
    """
    Filesystem storage under MEDIA_ROOT, served from MEDIA_URL.

    Configuration (in settings.py):
        MEDIA_ROOT: Directory files are written to
        MEDIA_URL: URL prefix files are served from
    """

    backend_name = "local"

    def __init__(self):
        super().__init__(FileSystemStorage(location=settings.MEDIA_ROOT, base_url=settings.MEDIA_URL))
