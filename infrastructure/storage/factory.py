"""
Storage Factory
===============

Creates the storage adapter selected by ``settings.STORAGE_BACKEND``.
"""

import logging
from typing import Literal, Optional

from django.conf import settings

from .interface import StorageInterface

logger = logging.getLogger(__name__)

StorageBackend = Literal["local", "s3"]


class StorageFactory:
    """
    Usage:
        # In settings.py
        STORAGE_BACKEND = 'local'  # or 's3'

        # In your code
        storage = StorageFactory.create()
    """

    @staticmethod
    def create(backend: Optional[StorageBackend] = None) -> StorageInterface:
        backend_type = backend or getattr(settings, "STORAGE_BACKEND", "local")

        logger.info(f"Creating storage backend: {backend_type}")

        if backend_type == "local":
            from .django_adapter import LocalStorageAdapter

            return LocalStorageAdapter()
        if backend_type == "s3":
            from .s3_adapter import S3StorageAdapter

            return S3StorageAdapter()
        raise ValueError(f"Invalid storage backend: {backend_type}. Use 'local' or 's3'")
