"""
Media Host Infrastructure Tests
================================

Unit tests for the media host abstraction layer.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

from django.core.files.storage import FileSystemStorage
from django.test import TestCase, override_settings
from PIL import Image

from infrastructure.media import (
    MediaAsset,
    MediaHostException,
    MediaHostFactory,
    MediaHostInterface,
    StorageMediaHost,
)


class MediaHostInterfaceTest(TestCase):
    """Test MediaHostInterface contract."""

    def test_interface_is_abstract(self):
        with self.assertRaises(TypeError):
            MediaHostInterface()

    def test_asset_to_dict(self):
        asset = MediaAsset(
            public_id="products/p.jpg",
            secure_url="https://cdn.example.com/products/p.jpg",
            folder="products",
            width=400,
            height=420,
            format="jpg",
            bytes=1024,
        )

        self.assertEqual(asset.to_dict()["public_id"], "products/p.jpg")
        self.assertIsNone(asset.to_dict()["bucket"])


@override_settings(MEDIA_HOST={"QUALITY": 80})
class StorageMediaHostTest(TestCase):
    """Test StorageMediaHost on a temporary filesystem storage."""

    def setUp(self):
        self.root = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.root, ignore_errors=True)
        self.storage = FileSystemStorage(location=str(self.root / "media"), base_url="/media/")
        self.media_host = StorageMediaHost(storage=self.storage, bucket_name="local")

    def make_image(self, name="source.jpg", size=(800, 600), mode="RGB"):
        path = self.root / name
        Image.new(mode, size, "blue").save(path)
        return str(path)

    def test_upload_fill_crops_to_exact_size(self):
        source = self.make_image()

        asset = self.media_host.upload(
            source,
            folder="digistore/products",
            public_id="digistore-product-abc",
            transformation=[{"width": 400, "height": 420, "crop": "fill"}, {"quality": "auto"}],
        )

        self.assertEqual((asset.width, asset.height), (400, 420))
        self.assertEqual(asset.public_id, "digistore/products/digistore-product-abc.jpg")
        self.assertEqual(asset.format, "jpg")
        self.assertEqual(asset.bucket, "local")
        self.assertEqual(asset.secure_url, "/media/digistore/products/digistore-product-abc.jpg")
        self.assertTrue(self.storage.exists(asset.public_id))
        with self.storage.open(asset.public_id) as stored:
            self.assertEqual(Image.open(stored).size, (400, 420))

    def test_upload_fit_keeps_aspect_ratio(self):
        source = self.make_image(size=(800, 400))

        asset = self.media_host.upload(
            source, folder="products", public_id="wide", transformation=[{"width": 400, "height": 420, "crop": "fit"}]
        )

        self.assertEqual((asset.width, asset.height), (400, 200))

    def test_transparent_image_stays_png(self):
        source = self.make_image(name="logo.png", mode="RGBA")

        asset = self.media_host.upload(source, folder="products", public_id="logo")

        self.assertEqual(asset.format, "png")
        self.assertTrue(asset.public_id.endswith(".png"))

    def test_invalid_image(self):
        path = self.root / "broken.jpg"
        path.write_bytes(b"not an image")

        with self.assertRaises(MediaHostException):
            self.media_host.upload(str(path), folder="products", public_id="broken")

    def test_unsupported_crop(self):
        source = self.make_image()

        with self.assertRaises(MediaHostException):
            self.media_host.upload(
                source, folder="products", public_id="x", transformation=[{"width": 10, "crop": "pad"}]
            )

    def test_destroy(self):
        asset = self.media_host.upload(self.make_image(), folder="products", public_id="gone")

        self.assertTrue(self.media_host.destroy(asset.public_id, invalidate=True))
        self.assertFalse(self.storage.exists(asset.public_id))

    def test_destroy_missing_asset(self):
        self.assertFalse(self.media_host.destroy("products/missing.jpg"))

    def test_destroy_storage_error(self):
        storage = MagicMock()
        storage.exists.return_value = True
        storage.delete.side_effect = OSError("permission denied")

        with self.assertRaises(MediaHostException):
            StorageMediaHost(storage=storage).destroy("products/p.jpg")


class MediaHostFactoryTest(TestCase):
    """Test MediaHostFactory."""

    @override_settings(MEDIA_HOST_BACKEND="local")
    def test_create_local(self):
        media_host = MediaHostFactory.create()

        self.assertIsInstance(media_host, StorageMediaHost)
        self.assertIsInstance(media_host.storage, FileSystemStorage)

    @override_settings(AWS_STORAGE_BUCKET_NAME="digistore-media")
    @patch("storages.backends.s3boto3.S3Boto3Storage")
    def test_create_s3(self, mock_storage_class):
        media_host = MediaHostFactory.create("s3")

        self.assertEqual(media_host.bucket_name, "digistore-media")
        self.assertIs(media_host.storage, mock_storage_class.return_value)

    def test_create_invalid_backend(self):
        with self.assertRaises(ValueError):
            MediaHostFactory.create("cloud-of-cats")
