"""User model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from marketplace.database import Base


class User(Base):
    """Marketplace account bound to an identity-provider subject."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), nullable=False, unique=True, index=True, default=lambda: str(uuid.uuid4()))
    auth0_sub = Column(String(255), nullable=False, unique=True, index=True)
    nickname = Column(String(255), nullable=True)
    desc = Column(Text, nullable=True)
    avatar = Column(String(1000), nullable=True)  # URL in object storage
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    assets = relationship("Asset", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, uuid={self.uuid})>"
