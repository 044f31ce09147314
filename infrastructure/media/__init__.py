"""
Media Host Abstraction Layer
============================

Provides a unified interface for product image upload, transformation and removal.
"""

from .factory import MediaHostFactory
from .interface import MediaAsset, MediaHostException, MediaHostInterface
from .storage_media_host import StorageMediaHost

__all__ = [
    "MediaHostInterface",
    "MediaAsset",
    "MediaHostException",
    "StorageMediaHost",
    "MediaHostFactory",
]
