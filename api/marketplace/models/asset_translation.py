"""Asset translation model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from marketplace.database import Base


class AssetTranslation(Base):
    """Localized title and description of an asset."""

    __tablename__ = "asset_translations"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    language = Column(String(16), nullable=False, index=True)  # locale code, e.g. 'en', 'uk'
    title = Column(String(500), nullable=False)
    desc = Column(Text, nullable=False)

    # Relationships
    asset = relationship("Asset", back_populates="translations")

    def __repr__(self):
        return f"<AssetTranslation(id={self.id}, asset_id={self.asset_id}, language={self.language})>"
