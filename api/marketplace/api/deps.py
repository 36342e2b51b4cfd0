"""API dependencies."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from marketplace.config import StorageSettings, settings
from marketplace.database import get_db
from marketplace.security import InvalidTokenError, get_subject
from marketplace.services.ownership import AssetMutator
from marketplace.storage.base import BaseStorageDriver
from marketplace.storage.factory import get_storage_driver

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Get caller subject from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token is required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return get_subject(credentials.credentials)
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Your access token is not valid or expired",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_storage() -> BaseStorageDriver:
    """Get configured storage driver."""
    return get_storage_driver(settings)


def get_storage_settings() -> StorageSettings:
    """Get public addressing of the object store."""
    return settings.storage


def get_asset_mutator(
    db: Session = Depends(get_db),
    storage_driver: BaseStorageDriver = Depends(get_storage),
    storage_settings: StorageSettings = Depends(get_storage_settings),
) -> AssetMutator:
    """Get ownership-gated asset mutator bound to this request's session."""
    return AssetMutator(db, storage_driver, storage_settings)
