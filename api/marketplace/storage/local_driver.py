"""Local filesystem storage driver."""

import os
from pathlib import Path
from typing import Any, Dict

import aiofiles

from marketplace.storage.base import BaseStorageDriver, StorageError


class LocalStorageDriver(BaseStorageDriver):
    """Local filesystem storage driver for development.

    Configuration:
        base_path: Path to storage directory

    Example:
        >>> driver = LocalStorageDriver({"base_path": "/data/storage"})
        >>> await driver.upload_file("asset+cover.jpg", b"...")
        'asset+cover.jpg'
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.base_path = Path(config["base_path"]).resolve()

    def _validate_path(self, key: str) -> Path:
        """Resolve key inside base_path (prevent directory traversal).

        Raises:
            StorageError: If key tries to escape base_path
        """
        full_path = (self.base_path / key).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            raise StorageError(f"Key {key} attempts to escape base directory")

        return full_path

    async def upload_file(self, key: str, content: bytes) -> str:
        """Write object to the local filesystem."""
        full_path = self._validate_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            raise StorageError(f"Failed to upload file: {e}")

        return key

    async def delete_file(self, key: str) -> None:
        """Remove object from the local filesystem."""
        full_path = self._validate_path(key)
        try:
            full_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}")

    async def test_connection(self) -> bool:
        """Test if base path exists and is writable."""
        return self.base_path.exists() and os.access(self.base_path, os.W_OK)
