"""Asset model."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from marketplace.database import Base


class Asset(Base):
    """Sellable catalog entry."""

    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), nullable=False, unique=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    price = Column(Float, nullable=False)
    rating = Column(Float, default=0, nullable=False)
    likes = Column(Integer, default=0, nullable=False)
    discount = Column(Integer, default=0, nullable=False)  # 0 means no discount
    pictures = Column(JSON, default=list, nullable=False)  # ordered list of URLs
    file = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="assets")
    translations = relationship(
        "AssetTranslation",
        back_populates="asset",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Asset(id={self.id}, uuid={self.uuid}, user_id={self.user_id})>"
