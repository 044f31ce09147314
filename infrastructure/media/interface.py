"""
Media Host Interface
====================

Abstract base class defining the contract for image hosting operations.
A media host stores transformed images under a public identifier and serves
them from a public URL.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass
class MediaAsset:
    """
    Represents an image stored on the media host.

    Attributes:
        public_id: Host identifier used to address the asset later (e.g. for destroy)
        secure_url: Public HTTPS URL of the asset
        folder: Folder the asset was uploaded into
        width: Width in pixels after transformation
        height: Height in pixels after transformation
        format: Image format (e.g. 'jpg', 'png')
        bytes: Stored size in bytes
        bucket: Storage bucket/container name (optional)
    """

    public_id: str
    secure_url: str
    folder: str
    width: int
    height: int
    format: str
    bytes: int
    bucket: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, stored as the product's image details."""
        return asdict(self)


class MediaHostInterface(ABC):
    """
    Abstract interface for media host operations.

    Concrete implementations:
        - StorageMediaHost: Pillow transforms on top of a Django storage (S3 or filesystem)
    """

    @abstractmethod
    def upload(
        self,
        file_path: str,
        folder: str,
        public_id: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> MediaAsset:
        """
        Upload an image, applying the transformation pipeline first.

        Args:
            file_path: Local path of the image to upload
            folder: Destination folder on the host
            public_id: Identifier of the asset within the folder
            transformation: Ordered transformation steps, e.g.
                [{"width": 400, "height": 420, "crop": "fill"}, {"quality": "auto"}]

        Returns:
            MediaAsset describing the stored image

        Raises:
            MediaHostException: If the image cannot be read, transformed or stored
        """
        pass

    @abstractmethod
    def destroy(self, public_id: str, invalidate: bool = False) -> bool:
        """
        Remove an asset from the host.

        Args:
            public_id: Identifier returned by upload
            invalidate: Also invalidate cached copies of the asset

        Returns:
            True if the asset existed and was removed, False otherwise

        Raises:
            MediaHostException: If removal fails
        """
        pass


class MediaHostException(Exception):
    """Base exception for media host operations."""

    pass
