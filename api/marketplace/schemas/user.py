"""User schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserBase(BaseModel):
    """Base user schema."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nickname: Optional[str] = Field(None, max_length=255, description="Public nickname")
    desc: Optional[str] = Field(None, description="Profile description")


class UserCreate(UserBase):
    """Schema for creating a user bound to the caller's identity."""

    pass


class UserUpdate(UserBase):
    """Schema for updating a user."""

    pass


class UserPublic(UserBase):
    """Public profile, shown to any caller (e.g. as an asset's owner)."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    uuid: str
    avatar: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserResponse(UserPublic):
    """Schema for the caller's own account, including the identity-provider subject."""

    auth0_sub: str
