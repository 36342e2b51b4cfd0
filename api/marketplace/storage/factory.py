"""Storage driver factory."""

from marketplace.config import Settings
from marketplace.storage.base import BaseStorageDriver, StorageError
from marketplace.storage.local_driver import LocalStorageDriver
from marketplace.storage.s3_driver import S3StorageDriver


def get_storage_driver(settings: Settings) -> BaseStorageDriver:
    """Build the storage driver selected by ``settings.storage_provider``.

    Raises:
        StorageError: If the provider is unsupported or misconfigured
    """
    provider = settings.storage_provider.lower()

    if provider == "local":
        return LocalStorageDriver({"base_path": settings.storage_local_path})

    elif provider == "s3":
        driver_config = {
            "bucket_name": settings.storage_bucket,
            "aws_access_key_id": settings.storage_access_key_id,
            "aws_secret_access_key": settings.storage_secret_access_key,
            "region": settings.storage_region,
            "endpoint_url": settings.storage_endpoint_url,
        }
        missing = [k for k in ("aws_access_key_id", "aws_secret_access_key") if not driver_config[k]]
        if missing:
            raise StorageError(f"Missing required S3 configuration: {missing}")
        return S3StorageDriver(driver_config)

    else:
        raise StorageError(f"Unsupported storage provider: {provider}")
