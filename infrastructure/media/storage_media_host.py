"""
Storage Media Host
==================

Concrete implementation of MediaHostInterface on top of a Django storage backend
(S3 via django-storages in production, the local filesystem in development and tests).
Image transformations are applied with Pillow before the file is stored.
"""

import io
import logging
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import Storage
from PIL import Image, ImageOps, UnidentifiedImageError

from .interface import MediaAsset, MediaHostException, MediaHostInterface

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 85


class StorageMediaHost(MediaHostInterface):
    """
    Media host backed by a Django ``Storage``.

    Supported transformation steps:
        {"width": w, "height": h, "crop": "fill"}  resize and center-crop to exactly w x h
        {"width": w, "height": h, "crop": "fit"}   shrink to fit inside w x h, keeping aspect ratio
        {"quality": "auto" | int}                  JPEG quality ("auto" uses MEDIA_HOST["QUALITY"])
    """

    def __init__(self, storage: Storage, bucket_name: Optional[str] = None):
        self.storage = storage
        self._bucket_name = bucket_name

    def upload(
        self,
        file_path: str,
        folder: str,
        public_id: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> MediaAsset:
        try:
            with Image.open(file_path) as source:
                image, quality = self._apply_transformation(source, transformation or [])
                payload, image_format = self._encode(image, quality)

            key = f"{folder.strip('/')}/{public_id}.{image_format}"
            saved_key = self.storage.save(key, ContentFile(payload))
            url = self.storage.url(saved_key)

            logger.info(f"Uploaded image to media host: {saved_key} ({image.width}x{image.height})")

            return MediaAsset(
                public_id=saved_key,
                secure_url=url,
                folder=folder,
                width=image.width,
                height=image.height,
                format=image_format,
                bytes=len(payload),
                bucket=self._bucket_name,
            )

        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Failed to read image for upload: {file_path}. Error: {str(e)}")
            raise MediaHostException(f"Invalid image file: {str(e)}") from e
        except MediaHostException:
            raise
        except Exception as e:
            logger.error(f"Failed to upload image to media host: {public_id}. Error: {str(e)}")
            raise MediaHostException(f"Media upload failed: {str(e)}") from e

    def destroy(self, public_id: str, invalidate: bool = False) -> bool:
        try:
            if not self.storage.exists(public_id):
                logger.warning(f"Media asset not found, cannot destroy: {public_id}")
                return False

            self.storage.delete(public_id)
            if invalidate:
                # Keys are never reused, stale CDN copies expire on their own
                logger.debug(f"Invalidation requested for {public_id}")

            logger.info(f"Destroyed media asset: {public_id}")
            return True

        except Exception as e:
            logger.error(f"Failed to destroy media asset: {public_id}. Error: {str(e)}")
            raise MediaHostException(f"Media destroy failed: {str(e)}") from e

    def _apply_transformation(
        self, image: Image.Image, transformation: List[Dict[str, Any]]
    ) -> Tuple[Image.Image, Optional[int]]:
        """
        Apply transformation steps in order.

        Args:
            image: Source image
            transformation: Ordered list of steps

        Returns:
            Tuple of (transformed image, JPEG quality or None for the encoder default)
        """
        image = ImageOps.exif_transpose(image)
        quality = None

        for step in transformation:
            if "width" in step or "height" in step:
                width = int(step.get("width") or image.width)
                height = int(step.get("height") or image.height)
                crop = step.get("crop", "fill")

                if crop == "fill":
                    image = ImageOps.fit(image, (width, height), Image.LANCZOS)
                elif crop == "fit":
                    image = image.copy()
                    image.thumbnail((width, height), Image.LANCZOS)
                else:
                    raise MediaHostException(f"Unsupported crop mode: {crop}")

            if "quality" in step:
                value = step["quality"]
                if value == "auto":
                    quality = getattr(settings, "MEDIA_HOST", {}).get("QUALITY", DEFAULT_QUALITY)
                else:
                    quality = int(value)

        return image, quality

    def _encode(self, image: Image.Image, quality: Optional[int]) -> Tuple[bytes, str]:
        """
        Encode the image; images with transparency stay PNG, everything else becomes JPEG.

        Returns:
            Tuple of (encoded bytes, file extension)
        """
        buffer = io.BytesIO()

        if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
            image.save(buffer, format="PNG", optimize=True)
            return buffer.getvalue(), "png"

        if image.mode != "RGB":
            image = image.convert("RGB")
        image.save(buffer, format="JPEG", quality=quality or DEFAULT_QUALITY, optimize=True)
        return buffer.getvalue(), "jpg"

    @property
    def bucket_name(self) -> Optional[str]:
        return self._bucket_name
