"""
Storage Abstraction Layer
==========================

Provides a unified interface for file storage operations (local filesystem or S3/MinIO).
"""

from .django_adapter import DjangoStorageAdapter, LocalStorageAdapter
from .factory import StorageFactory
from .interface import StorageException, StorageFile, StorageInterface

__all__ = [
    "StorageInterface",
    "StorageFile",
    "StorageException",
    "DjangoStorageAdapter",
    "LocalStorageAdapter",
    "StorageFactory",
]
