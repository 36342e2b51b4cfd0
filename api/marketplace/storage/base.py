"""Base storage driver interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


class BaseStorageDriver(ABC):
    """Base class for storage drivers.

    Drivers store opaque objects under a key. Public URLs are not the
    driver's concern: they are derived from the key by
    :class:`marketplace.config.StorageSettings`.
    """

    def __init__(self, config: Dict[str, Any]):
        """Initialize storage driver with configuration.

        Args:
            config: Storage configuration dict with provider-specific settings
        """
        self.config = config

    @abstractmethod
    async def upload_file(self, key: str, content: bytes) -> str:
        """Upload object and return its key.

        Args:
            key: Object key
            content: File content as bytes

        Returns:
            Key the object was stored under

        Raises:
            StorageError: If upload fails
        """
        pass

    @abstractmethod
    async def delete_file(self, key: str) -> None:
        """Delete object. Deleting a missing key is not an error.

        Raises:
            StorageError: If deletion fails
        """
        pass

    @abstractmethod
    async def test_connection(self) -> bool:
        """Test if storage is accessible.

        Returns:
            True if connection successful, False otherwise
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class StorageConnectionError(StorageError):
    """Exception for connection errors."""

    pass


@dataclass(frozen=True)
class UploadBlob:
    """An uploaded file handed to the services: original name and bytes."""

    filename: str
    content: bytes
