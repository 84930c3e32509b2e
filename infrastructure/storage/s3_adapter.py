"""
S3 Storage Adapter
==================

StorageInterface backed by AWS S3 (or MinIO) via django-storages.
"""

from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage

from .django_adapter import DjangoStorageAdapter


class S3StorageAdapter(DjangoStorageAdapter):
    """
    Configuration (in settings.py):
        AWS_ACCESS_KEY_ID: AWS access key
        AWS_SECRET_ACCESS_KEY: AWS secret key
        AWS_STORAGE_BUCKET_NAME: S3 bucket name
        AWS_S3_ENDPOINT_URL: MinIO endpoint (optional)
    """

    backend_name = "s3"

    def __init__(self):
        super().__init__(S3Boto3Storage(), bucket=getattr(settings, "AWS_STORAGE_BUCKET_NAME", "default-bucket"))
