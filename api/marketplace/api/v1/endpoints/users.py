"""User endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_subject, get_storage, get_storage_settings
from marketplace.api.errors import raise_http
from marketplace.config import StorageSettings
from marketplace.database import get_db
from marketplace.models.user import User
from marketplace.schemas.user import UserCreate, UserPublic, UserResponse, UserUpdate
from marketplace.services.errors import ServiceError
from marketplace.services.user_service import (
    create_user,
    delete_user,
    get_user_by_sub,
    get_user_by_uuid,
    set_avatar,
    update_user,
)
from marketplace.storage.base import BaseStorageDriver, StorageError

router = APIRouter()


def _ensure_self(db: Session, user_uuid: str, subject: str) -> User:
    """Return the user if it is the caller's own account."""
    try:
        user = get_user_by_uuid(db, user_uuid)
    except ServiceError as e:
        raise_http(e)
    if user.auth0_sub != subject:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Users can only change their own account",
        )
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    user_data: UserCreate,
    subject: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    """
    Create the caller's account.

    - **nickname**: Public nickname (optional)
    - **desc**: Profile description (optional)
    """
    try:
        return create_user(db, user_data, subject)
    except ServiceError as e:
        raise_http(e)


@router.get("/me", response_model=UserResponse)
def get_me(
    subject: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    """Get the caller's account."""
    try:
        return get_user_by_sub(db, subject)
    except ServiceError as e:
        raise_http(e)


@router.get("/{user_uuid}", response_model=UserPublic, dependencies=[Depends(get_current_subject)])
def get_user(
    user_uuid: str,
    db: Session = Depends(get_db),
):
    """Get user by UUID."""
    try:
        return get_user_by_uuid(db, user_uuid)
    except ServiceError as e:
        raise_http(e)


@router.patch("/{user_uuid}", response_model=UserResponse)
def update_user_endpoint(
    user_uuid: str,
    changes: UserUpdate,
    subject: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    """Update nickname or description of the caller's account."""
    _ensure_self(db, user_uuid, subject)
    try:
        return update_user(db, user_uuid, changes)
    except ServiceError as e:
        raise_http(e)


@router.delete("/{user_uuid}", response_model=int)
def delete_user_endpoint(
    user_uuid: str,
    subject: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    """Delete the caller's account together with all of its assets."""
    _ensure_self(db, user_uuid, subject)
    try:
        return delete_user(db, user_uuid)
    except ServiceError as e:
        raise_http(e)


@router.post("/{user_uuid}/avatar", response_model=UserResponse)
async def set_avatar_endpoint(
    user_uuid: str,
    avatar: UploadFile = File(..., description="Avatar image"),
    subject: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
    storage_driver: BaseStorageDriver = Depends(get_storage),
    storage_settings: StorageSettings = Depends(get_storage_settings),
):
    """Upload the caller's avatar."""
    _ensure_self(db, user_uuid, subject)
    content = await avatar.read()
    try:
        return await set_avatar(
            db, storage_driver, storage_settings, user_uuid, avatar.filename or "avatar", content
        )
    except (ServiceError, StorageError) as e:
        raise_http(e)
