"""Application configuration."""

from dataclasses import dataclass
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class StorageSettings:
    """Public addressing of the object store.

    Uploaded objects are reachable at ``<bucket>.<host>/<key>``; the same rule
    is used to rebuild a stored URL from an object key.
    """

    bucket: str
    host: str

    def object_url(self, key: str) -> str:
        return f"{self.bucket}.{self.host}/{key}"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    postgres_host: str = "postgres"
    postgres_port: int = 5432
    postgres_user: str = "marketplace"
    postgres_password: str = "changeme"
    postgres_db: str = "marketplace_db"
    database_url_override: Optional[str] = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # Identity provider
    auth_jwt_secret: str = "changeme-use-the-identity-provider-signing-key"
    auth_jwt_algorithms: List[str] = ["HS256"]
    auth_audience: Optional[str] = None
    auth_issuer: Optional[str] = None

    # Object storage
    storage_provider: str = "s3"
    storage_bucket: str = "marketplace-assets"
    storage_host: str = "s3.amazonaws.com"
    storage_region: str = "us-east-1"
    storage_access_key_id: str = ""
    storage_secret_access_key: str = ""
    storage_endpoint_url: Optional[str] = None
    storage_local_path: str = "data/storage"

    # Uploads
    max_picture_size_bytes: int = 2 * 1000 * 1000
    allowed_picture_types: List[str] = ["image/jpeg"]

    # Logging
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        """Build database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def storage(self) -> StorageSettings:
        """Public addressing used to build picture and file URLs."""
        return StorageSettings(bucket=self.storage_bucket, host=self.storage_host)


settings = Settings()
