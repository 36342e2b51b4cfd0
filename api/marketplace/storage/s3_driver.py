"""S3-compatible storage driver (AWS S3, DigitalOcean Spaces, MinIO, etc)."""

from typing import Any, Dict

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from marketplace.storage.base import (
    BaseStorageDriver,
    StorageConnectionError,
    StorageError,
)


class S3StorageDriver(BaseStorageDriver):
    """S3-compatible storage driver.

    Configuration:
        aws_access_key_id: Access key
        aws_secret_access_key: Secret key
        bucket_name: Bucket name
        region: AWS region (default: us-east-1)
        endpoint_url: Custom endpoint URL (for Spaces, MinIO, etc)

    Objects are uploaded with a ``public-read`` ACL so that the
    ``<bucket>.<host>/<key>`` URL stored on the asset is reachable.
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.bucket_name = config["bucket_name"]

        # S3 client configuration
        self.s3_config = {
            "aws_access_key_id": config["aws_access_key_id"],
            "aws_secret_access_key": config["aws_secret_access_key"],
            "region_name": config.get("region", "us-east-1"),
        }

        if config.get("endpoint_url"):
            self.s3_config["endpoint_url"] = config["endpoint_url"]

        self.session = aioboto3.Session()

    async def upload_file(self, key: str, content: bytes) -> str:
        """Upload object to S3.

        Args:
            key: Object key
            content: File content

        Returns:
            Key the object was stored under
        """
        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=content,
                    ACL="public-read",
                )
            return key

        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload file: {e}")

    async def delete_file(self, key: str) -> None:
        """Delete object from S3."""
        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.delete_object(Bucket=self.bucket_name, Key=key)

        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete file: {e}")

    async def test_connection(self) -> bool:
        """Test S3 connection by checking if bucket exists.

        Returns:
            True if bucket is accessible
        """
        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.head_bucket(Bucket=self.bucket_name)
            return True

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code in ("404", "NoSuchBucket"):
                raise StorageConnectionError(f"Bucket not found: {self.bucket_name}")
            elif error_code == "403":
                raise StorageConnectionError(f"Access denied to bucket: {self.bucket_name}")
            return False

        except BotoCoreError as e:
            raise StorageConnectionError(f"Storage unreachable: {e}")
