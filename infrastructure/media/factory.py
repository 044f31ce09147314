"""
Media Host Factory
==================

Factory pattern for creating media host instances based on configuration.
"""

import logging
from typing import Literal

from django.conf import settings
from django.core.files.storage import FileSystemStorage

from .interface import MediaHostInterface
from .storage_media_host import StorageMediaHost

logger = logging.getLogger(__name__)

MediaBackend = Literal["s3", "local"]


class MediaHostFactory:
    """
    Factory for creating media host instances.

    Usage:
        # In settings.py
        MEDIA_HOST_BACKEND = 's3'  # or 'local' for development and tests

        # In your code
        media_host = MediaHostFactory.create()
    """

    @staticmethod
    def create(backend: MediaBackend | None = None) -> MediaHostInterface:
        """
        Create a media host instance.

        Args:
            backend: Media backend type ('s3' or 'local')
                    If None, reads from settings.MEDIA_HOST_BACKEND

        Returns:
            MediaHostInterface implementation

        Raises:
            ValueError: If backend type is invalid
        """
        backend_type = backend or getattr(settings, "MEDIA_HOST_BACKEND", "s3")

        logger.info(f"Creating media host backend: {backend_type}")

        if backend_type == "s3":
            return MediaHostFactory.create_s3()
        elif backend_type == "local":
            return MediaHostFactory.create_local()
        raise ValueError(f"Invalid media host backend: {backend_type}. Must be 's3' or 'local'")

    @staticmethod
    def create_s3() -> StorageMediaHost:
        """
        Create an S3-backed media host (django-storages).

        Returns:
            StorageMediaHost instance
        """
        from storages.backends.s3boto3 import S3Boto3Storage

        return StorageMediaHost(
            storage=S3Boto3Storage(),
            bucket_name=getattr(settings, "AWS_STORAGE_BUCKET_NAME", "default-bucket"),
        )

    @staticmethod
    def create_local() -> StorageMediaHost:
        """
        Create a filesystem-backed media host under MEDIA_ROOT.

        Returns:
            StorageMediaHost instance
        """
        return StorageMediaHost(storage=FileSystemStorage(location=settings.MEDIA_ROOT))
