"""Ownership-gated mutations of assets.

Every mutation resolves the caller's subject to a user and checks that the
user owns the asset before changing anything. The final check and the
change run in the same transaction with the asset row locked, so the owner
cannot change or the row disappear between them. Ownership decisions are
never cached across calls. The row lock is never held across an await:
uploads happen before the locking transaction starts.
"""

import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.orm import Session

from marketplace.config import StorageSettings
from marketplace.models.asset import Asset
from marketplace.schemas.asset import AssetQuery
from marketplace.services.asset_query import find_assets, get_asset
from marketplace.services.asset_service import discard_objects, upload_pictures
from marketplace.services.errors import AuthorizationError, BadRequestError, ServiceError
from marketplace.services.user_service import get_user_by_sub
from marketplace.storage.base import BaseStorageDriver, UploadBlob

logger = logging.getLogger(__name__)


class AssetMutator:
    """Applies picture changes and deletions on behalf of an asset's owner."""

    def __init__(
        self,
        db: Session,
        storage_driver: BaseStorageDriver,
        storage_settings: StorageSettings,
    ):
        self.db = db
        self.storage_driver = storage_driver
        self.storage_settings = storage_settings

    def assert_ownership(self, subject: str, asset_uuid: str, lock: bool = True) -> Asset:
        """Load the asset if the caller owns it, locking its row unless ``lock`` is False.

        Raises:
            NotFoundError: If the caller's user or the asset does not exist
            AuthorizationError: If the asset belongs to someone else
        """
        user = get_user_by_sub(self.db, subject)
        asset = get_asset(self.db, asset_uuid, lock=lock)

        if asset.user_id != user.id:
            self.db.rollback()
            logger.warning(f"User {user.uuid} tried to modify asset {asset_uuid} owned by another user")
            raise AuthorizationError(f"Asset {asset_uuid} does not belong to the caller")

        return asset

    async def add_pictures(self, asset_uuid: str, subject: str, pictures: List[UploadBlob]) -> Asset:
        """Append pictures to the asset, keeping existing ones first.

        Ownership is checked before any upload and again, under the row lock,
        when the new URLs are appended. Uploads run one at a time. If any
        upload or the second check fails, nothing is persisted, pictures
        already uploaded in this call are removed from storage, and the
        error propagates.

        Raises:
            NotFoundError: If the caller's user or the asset does not exist
            AuthorizationError: If the asset belongs to someone else
            StorageError: If an upload fails
        """
        self.assert_ownership(subject, asset_uuid, lock=False)
        # end the read transaction before awaiting storage
        self.db.rollback()

        uploaded_keys = await upload_pictures(self.storage_driver, asset_uuid, pictures)

        try:
            asset = self.assert_ownership(subject, asset_uuid)
        except ServiceError:
            await discard_objects(self.storage_driver, uploaded_keys)
            raise

        new_urls = [self.storage_settings.object_url(key) for key in uploaded_keys]
        asset.pictures = list(asset.pictures or []) + new_urls

        self.db.commit()
        self.db.refresh(asset)

        logger.info(f"Added {len(new_urls)} pictures to asset {asset_uuid}")
        return asset

    def remove_picture(self, asset_uuid: str, picture_id: str, subject: str) -> Asset:
        """Remove one picture whose URL is built from ``picture_id``.

        An identifier that matches no picture leaves the asset unchanged and
        is not an error.

        Raises:
            NotFoundError: If the caller's user or the asset does not exist
            AuthorizationError: If the asset belongs to someone else
        """
        asset = self.assert_ownership(subject, asset_uuid)

        url = self.storage_settings.object_url(picture_id)
        pictures = list(asset.pictures or [])

        if url not in pictures:
            self.db.rollback()
            logger.warning(f"Remove picture no-op: {url} not found on asset {asset_uuid}")
            return get_asset(self.db, asset_uuid)

        pictures.remove(url)
        asset.pictures = pictures

        self.db.commit()
        self.db.refresh(asset)

        logger.info(f"Removed picture {picture_id} from asset {asset_uuid}")
        return asset

    def delete_asset(self, asset_uuid: str, subject: str) -> int:
        """Delete an asset owned by the caller. Translations go with it.

        Returns:
            Number of deleted rows

        Raises:
            NotFoundError: If the caller's user or the asset does not exist
            AuthorizationError: If the asset is not among the caller's assets
            BadRequestError: If the row vanished before the delete
        """
        user = get_user_by_sub(self.db, subject)
        get_asset(self.db, asset_uuid, lock=True)

        owned = find_assets(self.db, AssetQuery(user_uuid=user.uuid))
        if not any(a.uuid == asset_uuid for a in owned):
            self.db.rollback()
            logger.warning(f"User {user.uuid} tried to delete asset {asset_uuid} owned by another user")
            raise AuthorizationError(f"Asset {asset_uuid} does not belong to the caller")

        result = self.db.execute(delete(Asset).where(Asset.uuid == asset_uuid))
        if result.rowcount == 0:
            self.db.rollback()
            raise BadRequestError(f"Can't find asset with id '{asset_uuid}'")

        self.db.commit()

        logger.info(f"Deleted asset {asset_uuid}")
        return result.rowcount
