"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time; configure them before importing the app.
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["STORAGE_BUCKET"] = "test-bucket"
os.environ["STORAGE_HOST"] = "storage.test"
os.environ["STORAGE_PROVIDER"] = "local"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.api.deps import get_storage
from marketplace.config import StorageSettings
from marketplace.database import Base, get_db
from marketplace.main import app
from marketplace.models.asset import Asset
from marketplace.models.asset_translation import AssetTranslation
from marketplace.models.user import User
from marketplace.storage.base import BaseStorageDriver, StorageError

STORAGE_SETTINGS = StorageSettings(bucket="test-bucket", host="storage.test")


class FakeStorageDriver(BaseStorageDriver):
    """In-memory storage driver; can be told to fail on the n-th upload."""

    def __init__(self, fail_on_upload: int = 0, connected: bool = True, on_upload=None):
        super().__init__({})
        self.objects = {}
        self.uploads = []
        self.fail_on_upload = fail_on_upload
        self.connected = connected
        self.on_upload = on_upload

    async def upload_file(self, key: str, content: bytes) -> str:
        self.uploads.append(key)
        if self.on_upload:
            self.on_upload(key)
        if self.fail_on_upload and len(self.uploads) == self.fail_on_upload:
            raise StorageError(f"Failed to upload file: {key}")
        self.objects[key] = content
        return key

    async def delete_file(self, key: str) -> None:
        self.objects.pop(key, None)

    async def test_connection(self) -> bool:
        if not self.connected:
            raise StorageError("Storage unreachable")
        return True


def make_token(subject: str, expires_in: timedelta = timedelta(minutes=5)) -> str:
    """Sign a token the way the identity provider would."""
    payload = {"sub": subject, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, "test-secret", algorithm="HS256")


def auth_headers(subject: str) -> dict:
    return {"Authorization": f"Bearer {make_token(subject)}"}


@pytest.fixture(scope="session")
def test_engine():
    """Create test database engine."""
    # One shared in-memory database across threads (TestClient runs the app in a worker thread)
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def test_db(test_engine):
    """Create a test database session on fresh tables."""
    Base.metadata.create_all(bind=test_engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def storage():
    return FakeStorageDriver()


@pytest.fixture
def client(test_db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    def _make_user(subject: str, nickname: str = "") -> User:
        user = User(auth0_sub=subject, nickname=nickname or subject)
        test_db.add(user)
        test_db.commit()
        test_db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_asset(test_db):
    def _make_asset(user: User, price: float = 100, translations=None, **fields) -> Asset:
        translations = translations if translations is not None else [("en", "Asset", "An asset")]
        asset = Asset(
            user=user,
            price=price,
            translations=[
                AssetTranslation(language=language, title=title, desc=desc)
                for language, title, desc in translations
            ],
            **fields,
        )
        test_db.add(asset)
        test_db.commit()
        test_db.refresh(asset)
        return asset

    return _make_asset
