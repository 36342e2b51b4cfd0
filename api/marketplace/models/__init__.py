"""SQLAlchemy models."""

from marketplace.database import Base
from marketplace.models.user import User
from marketplace.models.asset import Asset
from marketplace.models.asset_translation import AssetTranslation

__all__ = [
    "Base",
    "User",
    "Asset",
    "AssetTranslation",
]
