"""User business logic service."""

import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from marketplace.config import StorageSettings
from marketplace.models.user import User
from marketplace.schemas.user import UserCreate, UserUpdate
from marketplace.services.errors import BadRequestError, NotFoundError
from marketplace.storage.base import BaseStorageDriver

logger = logging.getLogger(__name__)


def create_user(db: Session, data: UserCreate, subject: str) -> User:
    """Create a user bound to an identity-provider subject.

    Raises:
        BadRequestError: If the subject already has an account
    """
    existing = db.query(User).filter(User.auth0_sub == subject).first()
    if existing:
        raise BadRequestError(f"User for subject '{subject}' already exists")

    user = User(auth0_sub=subject, nickname=data.nickname, desc=data.desc)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Created user {user.uuid}")
    return user


def get_user_by_uuid(db: Session, user_uuid: str) -> User:
    """Get user by UUID.

    Raises:
        NotFoundError: If user not found
    """
    user = db.query(User).filter(User.uuid == user_uuid).first()
    if not user:
        raise NotFoundError(f"User {user_uuid} not found")
    return user


def get_user_by_sub(db: Session, subject: str) -> User:
    """Get user by identity-provider subject.

    Raises:
        NotFoundError: If no user is bound to the subject
    """
    user = db.query(User).filter(User.auth0_sub == subject).first()
    if not user:
        raise NotFoundError(f"No user for subject '{subject}'")
    return user


def update_user(db: Session, user_uuid: str, changes: UserUpdate) -> User:
    """Apply the fields present in ``changes``."""
    user = get_user_by_uuid(db, user_uuid)

    for field, value in changes.model_dump(exclude_unset=True).items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_uuid: str) -> int:
    """Delete user and, by cascade, their assets.

    Returns:
        Number of deleted rows

    Raises:
        BadRequestError: If nothing was deleted
    """
    result = db.execute(delete(User).where(User.uuid == user_uuid))
    if result.rowcount == 0:
        db.rollback()
        raise BadRequestError(f"Can't find user with id '{user_uuid}'")

    db.commit()
    logger.info(f"Deleted user {user_uuid}")
    return result.rowcount


async def set_avatar(
    db: Session,
    storage_driver: BaseStorageDriver,
    storage_settings: StorageSettings,
    user_uuid: str,
    filename: str,
    content: bytes,
) -> User:
    """Upload avatar and store its URL on the user.

    Raises:
        NotFoundError: If user not found
        StorageError: If upload fails
    """
    user = get_user_by_uuid(db, user_uuid)

    key = await storage_driver.upload_file(f"avatar:{user.uuid}_{filename}", content)
    user.avatar = storage_settings.object_url(key)

    db.commit()
    db.refresh(user)
    return user
