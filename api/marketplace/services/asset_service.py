"""Asset business logic service."""

import logging
from typing import List

from sqlalchemy.orm import Session

from marketplace.config import StorageSettings
from marketplace.models.asset import Asset
from marketplace.models.asset_translation import AssetTranslation
from marketplace.schemas.asset import AssetCreate
from marketplace.services.asset_query import get_asset
from marketplace.services.user_service import get_user_by_uuid
from marketplace.storage.base import BaseStorageDriver, StorageError, UploadBlob

logger = logging.getLogger(__name__)


def picture_key(asset_uuid: str, filename: str) -> str:
    """Object key of a preview picture."""
    return f"{asset_uuid}+{filename}"


def file_key(asset_uuid: str, filename: str) -> str:
    """Object key of the primary file."""
    return f"file:{asset_uuid}_{filename}"


def create_asset(db: Session, data: AssetCreate, user_uuid: str) -> Asset:
    """Create asset with its translations for the given owner.

    The asset, its translations and the owner link are persisted in one
    commit. Pictures and the primary file are attached afterwards, once the
    asset UUID exists to key the uploads.

    Args:
        db: Database session
        data: Price, discount and translations
        user_uuid: Owner UUID

    Returns:
        Created Asset

    Raises:
        NotFoundError: If the owner does not exist

    Examples:
        >>> asset = create_asset(
        ...     db,
        ...     AssetCreate(price=100, lang=[{"language": "en", "title": "Rock", "desc": "A rock"}]),
        ...     user_uuid="060fbcfa-243f-46b9-a1d3-7bdc1f4c80a5",
        ... )
        >>> asset.pictures
        []
    """
    user = get_user_by_uuid(db, user_uuid)

    asset = Asset(
        user=user,
        price=data.price,
        discount=data.discount,
        pictures=[],
        translations=[
            AssetTranslation(language=t.language, title=t.title, desc=t.desc)
            for t in data.lang
        ],
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)

    logger.info(f"Created asset {asset.uuid} for user {user_uuid}")
    return asset


async def upload_pictures(
    storage_driver: BaseStorageDriver,
    asset_uuid: str,
    pictures: List[UploadBlob],
) -> List[str]:
    """Upload pictures one after another and return their keys in input order.

    If an upload fails, pictures already uploaded in this call are removed
    from storage and the error propagates.
    """
    keys: List[str] = []
    try:
        for picture in pictures:
            keys.append(await storage_driver.upload_file(picture_key(asset_uuid, picture.filename), picture.content))
    except Exception as e:
        logger.error(f"Upload failed for asset {asset_uuid}, discarding {len(keys)} pictures: {e}", exc_info=True)
        await discard_objects(storage_driver, keys)
        raise
    return keys


async def discard_objects(storage_driver: BaseStorageDriver, keys: List[str]) -> None:
    """Best-effort removal of objects that will not be referenced."""
    for key in keys:
        try:
            await storage_driver.delete_file(key)
        except StorageError as e:
            logger.error(f"Failed to discard uploaded object {key}: {e}")


async def set_pictures(
    db: Session,
    storage_driver: BaseStorageDriver,
    storage_settings: StorageSettings,
    asset_uuid: str,
    pictures: List[UploadBlob],
) -> Asset:
    """Replace the asset's preview pictures.

    Raises:
        NotFoundError: If asset not found
        StorageError: If an upload fails; the stored list is left untouched
            and the pictures uploaded so far are discarded
    """
    asset = get_asset(db, asset_uuid)

    keys = await upload_pictures(storage_driver, asset.uuid, pictures)
    urls = [storage_settings.object_url(key) for key in keys]
    asset.pictures = urls

    db.commit()
    db.refresh(asset)

    logger.info(f"Set {len(urls)} pictures on asset {asset_uuid}")
    return asset


async def set_file(
    db: Session,
    storage_driver: BaseStorageDriver,
    storage_settings: StorageSettings,
    asset_uuid: str,
    file: UploadBlob,
) -> Asset:
    """Upload and attach the asset's primary file.

    Raises:
        NotFoundError: If asset not found
        StorageError: If upload fails
    """
    asset = get_asset(db, asset_uuid)

    key = await storage_driver.upload_file(file_key(asset.uuid, file.filename), file.content)
    asset.file = storage_settings.object_url(key)

    db.commit()
    db.refresh(asset)

    logger.info(f"Attached file to asset {asset_uuid}")
    return asset
