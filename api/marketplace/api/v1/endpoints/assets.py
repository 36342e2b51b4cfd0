"""Asset endpoints."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from marketplace.api.deps import (
    get_asset_mutator,
    get_current_subject,
    get_storage,
    get_storage_settings,
)
from marketplace.api.errors import raise_http
from marketplace.config import StorageSettings, settings
from marketplace.database import get_db
from marketplace.schemas.asset import (
    AssetCreate,
    AssetPageResponse,
    AssetQuery,
    AssetResponse,
    Order,
    OrderBy,
    PageOptions,
)
from marketplace.services.asset_query import AssetPage, find_assets, get_asset
from marketplace.services.asset_service import create_asset, set_file, set_pictures
from marketplace.services.errors import ServiceError
from marketplace.services.ownership import AssetMutator
from marketplace.storage.base import BaseStorageDriver, StorageError, UploadBlob

router = APIRouter(dependencies=[Depends(get_current_subject)])


def asset_query_params(
    price: Optional[float] = Query(None, description="Exact price"),
    rating: Optional[float] = Query(None, description="Exact rating"),
    uuid: Optional[str] = Query(None, description="Asset UUID"),
    id: Optional[int] = Query(None, description="Asset ID"),
    title: Optional[str] = Query(None, description="Title of any translation"),
    desc: Optional[str] = Query(None, description="Description of any translation"),
    language: Optional[str] = Query(None, description="Language of any translation"),
    user_uuid: Optional[str] = Query(None, alias="userUuid", description="Only assets created by this user"),
    discount: Optional[bool] = Query(
        None, description="Pass true to keep only discounted assets; false or absent applies no filter"
    ),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0, description="Minimal price"),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0, description="Maximal price"),
    order_by: Optional[OrderBy] = Query(None, alias="orderBy", description="Field to sort by"),
) -> AssetQuery:
    """Collect asset filters from the query string."""
    return AssetQuery(
        price=price,
        rating=rating,
        uuid=uuid,
        id=id,
        title=title,
        desc=desc,
        language=language,
        user_uuid=user_uuid,
        discount=discount,
        min_price=min_price,
        max_price=max_price,
        order_by=order_by,
    )


def page_options_params(
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    take: Optional[int] = Query(None, ge=1, le=50, description="Page size"),
    order: Order = Query(Order.ASC, description="Sort direction"),
) -> Optional[PageOptions]:
    """Pagination is requested only when page or take is present."""
    if page is None and take is None:
        return None
    return PageOptions(page=page or 1, take=take or 10, order=order)


async def _read_pictures(files: List[UploadFile]) -> List[UploadBlob]:
    """Read uploaded pictures, rejecting non-JPEG or oversized files."""
    blobs = []
    for upload in files:
        if upload.content_type not in settings.allowed_picture_types:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Invalid picture type: {upload.content_type}",
            )
        content = await upload.read()
        if len(content) > settings.max_picture_size_bytes:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Picture {upload.filename} exceeds {settings.max_picture_size_bytes} bytes",
            )
        blobs.append(UploadBlob(filename=upload.filename or "picture.jpg", content=content))
    return blobs


@router.post("/create/{user_uuid}", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
def create_asset_endpoint(
    user_uuid: str,
    asset_data: AssetCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new asset owned by the given user.

    - **price**: Asset price (required)
    - **discount**: Discount amount, 0 means none (optional)
    - **lang**: Localized titles and descriptions (at least one)
    """
    try:
        return create_asset(db, asset_data, user_uuid)
    except ServiceError as e:
        raise_http(e)


@router.post("/{asset_uuid}/setPictures", response_model=AssetResponse)
async def set_pictures_endpoint(
    asset_uuid: str,
    pictures: List[UploadFile] = File(..., description="Preview pictures (jpeg only)"),
    db: Session = Depends(get_db),
    storage_driver: BaseStorageDriver = Depends(get_storage),
    storage_settings: StorageSettings = Depends(get_storage_settings),
):
    """Replace the asset's preview pictures."""
    blobs = await _read_pictures(pictures)
    try:
        return await set_pictures(db, storage_driver, storage_settings, asset_uuid, blobs)
    except (ServiceError, StorageError) as e:
        raise_http(e)


@router.post("/{asset_uuid}/setFile", response_model=AssetResponse)
async def set_file_endpoint(
    asset_uuid: str,
    file: UploadFile = File(..., description="Primary asset file"),
    db: Session = Depends(get_db),
    storage_driver: BaseStorageDriver = Depends(get_storage),
    storage_settings: StorageSettings = Depends(get_storage_settings),
):
    """Upload and attach the asset's primary file."""
    blob = UploadBlob(filename=file.filename or "file", content=await file.read())
    try:
        return await set_file(db, storage_driver, storage_settings, asset_uuid, blob)
    except (ServiceError, StorageError) as e:
        raise_http(e)


@router.post("/{asset_uuid}/pictures", response_model=AssetResponse)
async def add_pictures_endpoint(
    asset_uuid: str,
    pictures: List[UploadFile] = File(..., description="Pictures to append (jpeg only)"),
    subject: str = Depends(get_current_subject),
    mutator: AssetMutator = Depends(get_asset_mutator),
):
    """Append pictures to an asset the caller owns."""
    blobs = await _read_pictures(pictures)
    try:
        return await mutator.add_pictures(asset_uuid, subject, blobs)
    except (ServiceError, StorageError) as e:
        raise_http(e)


@router.delete("/{asset_uuid}/pictures/{picture_id}", response_model=AssetResponse)
def remove_picture_endpoint(
    asset_uuid: str,
    picture_id: str,
    subject: str = Depends(get_current_subject),
    mutator: AssetMutator = Depends(get_asset_mutator),
):
    """
    Remove one picture from an asset the caller owns.

    An unknown **picture_id** leaves the asset unchanged.
    """
    try:
        return mutator.remove_picture(asset_uuid, picture_id, subject)
    except ServiceError as e:
        raise_http(e)


@router.get("/get", response_model=Union[AssetPageResponse, List[AssetResponse]])
def get_assets_by_query(
    query: AssetQuery = Depends(asset_query_params),
    page_options: Optional[PageOptions] = Depends(page_options_params),
    db: Session = Depends(get_db),
):
    """
    Search assets.

    All filters are optional and combined with AND. Pass **page** or **take**
    to get a page with metadata instead of the full list.
    """
    try:
        result = find_assets(db, query, page_options)
    except ServiceError as e:
        raise_http(e)

    if isinstance(result, AssetPage):
        return AssetPageResponse(
            data=[AssetResponse.model_validate(asset) for asset in result.items],
            meta=result.meta,
        )
    return [AssetResponse.model_validate(asset) for asset in result]


@router.get("/{asset_uuid}", response_model=AssetResponse)
def get_asset_endpoint(
    asset_uuid: str,
    db: Session = Depends(get_db),
):
    """Get asset with translations and owner."""
    try:
        return get_asset(db, asset_uuid)
    except ServiceError as e:
        raise_http(e)


@router.delete("/{asset_uuid}", response_model=int)
def delete_asset_endpoint(
    asset_uuid: str,
    subject: str = Depends(get_current_subject),
    mutator: AssetMutator = Depends(get_asset_mutator),
):
    """Delete an asset the caller owns. Returns the number of deleted rows."""
    try:
        return mutator.delete_asset(asset_uuid, subject)
    except ServiceError as e:
        raise_http(e)
