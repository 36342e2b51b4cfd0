"""Object storage drivers for asset pictures, files and avatars."""

from marketplace.storage.base import BaseStorageDriver, StorageError, UploadBlob
from marketplace.storage.factory import get_storage_driver

__all__ = ["BaseStorageDriver", "StorageError", "UploadBlob", "get_storage_driver"]
