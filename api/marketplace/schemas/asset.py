"""Asset schemas."""

import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketplace.schemas.user import UserPublic


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderBy(str, Enum):
    """Asset fields a query result can be sorted by."""

    PRICE = "price"
    RATING = "rating"
    LIKES = "likes"
    DISCOUNT = "discount"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class Order(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class TranslationBase(CamelModel):
    """Base translation schema."""

    language: str = Field(..., min_length=2, max_length=16, description="Locale code", examples=["en"])
    title: str = Field(..., min_length=1, max_length=500, description="Localized title")
    desc: str = Field(..., description="Localized description")


class TranslationCreate(TranslationBase):
    """Schema for a translation submitted with a new asset."""

    pass


class TranslationResponse(TranslationBase):
    """Schema for translation response."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int


class AssetCreate(CamelModel):
    """Schema for creating an asset."""

    price: float = Field(..., ge=0, description="Asset price")
    discount: int = Field(default=0, ge=0, description="Discount amount, 0 means no discount")
    lang: List[TranslationCreate] = Field(..., min_length=1, description="Localized titles and descriptions")


class AssetResponse(CamelModel):
    """Schema for asset response with translations and owner."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    uuid: str
    price: float
    rating: float
    likes: int
    discount: int
    pictures: List[str] = Field(default_factory=list)
    file: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    translations: List[TranslationResponse] = Field(default_factory=list)
    user: Optional[UserPublic] = None


class AssetQuery(CamelModel):
    """Asset filters. Every field is optional and all present fields are ANDed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    price: Optional[float] = None
    rating: Optional[float] = None
    uuid: Optional[str] = None
    id: Optional[int] = None
    title: Optional[str] = None
    desc: Optional[str] = None
    language: Optional[str] = None
    user_uuid: Optional[str] = Field(None, description="Only assets created by this user")
    discount: Optional[bool] = Field(None, description="True keeps only discounted assets")
    min_price: Optional[float] = Field(None, ge=0, description="Inclusive lower price bound")
    max_price: Optional[float] = Field(None, ge=0, description="Inclusive upper price bound")
    order_by: Optional[OrderBy] = None


class PageOptions(CamelModel):
    """Pagination options."""

    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    take: int = Field(default=10, ge=1, le=50, description="Page size")
    order: Order = Order.ASC

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.take


class PageMeta(CamelModel):
    """Pagination metadata."""

    page: int
    page_size: int
    item_count: int
    page_count: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_count(cls, page_options: PageOptions, item_count: int) -> "PageMeta":
        page_count = math.ceil(item_count / page_options.take)
        return cls(
            page=page_options.page,
            page_size=page_options.take,
            item_count=item_count,
            page_count=page_count,
            has_previous_page=page_options.page > 1,
            has_next_page=page_options.page < page_count,
        )


class AssetPageResponse(CamelModel):
    """A page of assets with its metadata."""

    data: List[AssetResponse]
    meta: PageMeta
