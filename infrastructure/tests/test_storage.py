"""
Storage Infrastructure Tests
=============================

Unit tests for the file storage abstraction layer.
"""

import shutil
import tempfile
from io import BytesIO
from unittest.mock import MagicMock, patch

from django.core.files.base import ContentFile
from django.test import TestCase, override_settings

from infrastructure.storage import LocalStorageAdapter, StorageException, StorageFactory, StorageFile, StorageInterface
from infrastructure.storage.s3_adapter import S3StorageAdapter


class StorageInterfaceTest(TestCase):
    """Test StorageInterface contract."""

    def test_interface_is_abstract(self):
        """StorageInterface should not be instantiable."""
        with self.assertRaises(TypeError):
            StorageInterface()


class LocalStorageAdapterTest(TestCase):
    """Test LocalStorageAdapter against a temporary MEDIA_ROOT."""

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root, MEDIA_URL="/media/")
        self.settings_override.enable()
        self.adapter = LocalStorageAdapter()

    def tearDown(self):
        self.settings_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_upload_file(self):
        result = self.adapter.upload(ContentFile(b"id,name\n1,Mug\n"), "exports/products.csv", "text/csv")

        self.assertIsInstance(result, StorageFile)
        self.assertEqual(result.key, "exports/products.csv")
        self.assertEqual(result.url, "/media/exports/products.csv")
        self.assertEqual(result.size, 14)
        self.assertEqual(result.content_type, "text/csv")
        self.assertIsNone(result.bucket)
        self.assertTrue(self.adapter.exists("exports/products.csv"))

    def test_delete_file(self):
        self.adapter.upload(ContentFile(b"data"), "exports/old.txt", "text/plain")

        self.assertTrue(self.adapter.delete("exports/old.txt"))
        self.assertFalse(self.adapter.exists("exports/old.txt"))

    def test_delete_missing_file(self):
        self.assertFalse(self.adapter.delete("exports/missing.txt"))

    def test_get_url(self):
        self.assertEqual(self.adapter.get_url("exports/report.txt"), "/media/exports/report.txt")

    def test_upload_failure_raises_storage_exception(self):
        self.adapter.storage = MagicMock()
        self.adapter.storage.save.side_effect = OSError("disk full")

        with self.assertRaises(StorageException):
            self.adapter.upload(ContentFile(b"data"), "exports/x.csv", "text/csv")


@override_settings(AWS_STORAGE_BUCKET_NAME="test-bucket")
class S3StorageAdapterTest(TestCase):
    """Test S3StorageAdapter with the boto3 backend mocked out."""

    @patch("infrastructure.storage.s3_adapter.S3Boto3Storage")
    def test_upload_file_success(self, mock_storage_class):
        mock_storage = MagicMock()
        mock_storage_class.return_value = mock_storage
        mock_storage.save.return_value = "exports/orders.csv"
        mock_storage.size.return_value = 15
        mock_storage.url.return_value = "https://s3.amazonaws.com/test-bucket/exports/orders.csv"

        result = S3StorageAdapter().upload(BytesIO(b"S3 test content"), "exports/orders.csv", "text/csv")

        self.assertEqual(result.key, "exports/orders.csv")
        self.assertIn("s3.amazonaws.com", result.url)
        self.assertEqual(result.bucket, "test-bucket")

    @patch("infrastructure.storage.s3_adapter.S3Boto3Storage")
    def test_upload_error_wrapped(self, mock_storage_class):
        mock_storage = MagicMock()
        mock_storage_class.return_value = mock_storage
        mock_storage.save.side_effect = Exception("Access denied")

        with self.assertRaises(StorageException) as context:
            S3StorageAdapter().upload(BytesIO(b"x"), "exports/orders.csv", "text/csv")

        self.assertIn("Upload failed", str(context.exception))


class StorageFactoryTest(TestCase):
    """Test StorageFactory."""

    @override_settings(STORAGE_BACKEND="local")
    def test_create_local_from_settings(self):
        self.assertIsInstance(StorageFactory.create(), LocalStorageAdapter)

    @patch("infrastructure.storage.s3_adapter.S3Boto3Storage")
    def test_create_s3(self, mock_storage_class):
        mock_storage_class.return_value = MagicMock()
        self.assertIsInstance(StorageFactory.create("s3"), S3StorageAdapter)

    def test_create_invalid_backend(self):
        with self.assertRaises(ValueError) as context:
            StorageFactory.create("ftp")

        self.assertIn("Invalid storage backend", str(context.exception))
