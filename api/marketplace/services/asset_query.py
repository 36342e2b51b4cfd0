"""Asset query engine.

Translates an :class:`AssetQuery` into a single SQL query. Each filter field
maps to one predicate builder and every present field adds its predicate with
AND; there is no OR and no grouping.
"""

import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query, Session, selectinload

from marketplace.models.asset import Asset
from marketplace.models.asset_translation import AssetTranslation
from marketplace.models.user import User
from marketplace.schemas.asset import AssetQuery, Order, OrderBy, PageMeta, PageOptions
from marketplace.services.errors import InvalidQueryError, NotFoundError

PredicateBuilder = Callable[[Any], Optional[Any]]


def _translation_matches(column) -> PredicateBuilder:
    return lambda value: Asset.translations.any(column == value)


FIELD_FILTERS: Dict[str, PredicateBuilder] = {
    "price": lambda value: Asset.price == value,
    "rating": lambda value: Asset.rating == value,
    "uuid": lambda value: Asset.uuid == value,
    "id": lambda value: Asset.id == value,
    "title": _translation_matches(AssetTranslation.title),
    "desc": _translation_matches(AssetTranslation.desc),
    "language": _translation_matches(AssetTranslation.language),
    "user_uuid": lambda value: Asset.user.has(User.uuid == value),
    # discount=False means "don't care", not "no discount"
    "discount": lambda value: Asset.discount != 0 if value else None,
}

# Fields consumed outside FIELD_FILTERS
PRICE_RANGE_FIELDS = frozenset({"min_price", "max_price"})
ORDERING_FIELDS = frozenset({"order_by"})

ORDER_COLUMNS = {
    OrderBy.PRICE: Asset.price,
    OrderBy.RATING: Asset.rating,
    OrderBy.LIKES: Asset.likes,
    OrderBy.DISCOUNT: Asset.discount,
    OrderBy.CREATED_AT: Asset.created_at,
    OrderBy.UPDATED_AT: Asset.updated_at,
}


def _check_filter_surface() -> None:
    """Fail at import if a query field has no predicate or an order field no column."""
    handled = set(FIELD_FILTERS) | PRICE_RANGE_FIELDS | ORDERING_FIELDS
    unhandled = set(AssetQuery.model_fields) - handled
    unknown = handled - set(AssetQuery.model_fields)
    if unhandled or unknown:
        raise RuntimeError(
            f"Asset filter mapping out of sync: unhandled={sorted(unhandled)}, unknown={sorted(unknown)}"
        )
    missing_columns = set(OrderBy) - set(ORDER_COLUMNS)
    if missing_columns:
        raise RuntimeError(f"No column for order fields: {sorted(m.value for m in missing_columns)}")


_check_filter_surface()


@dataclass
class AssetPage:
    """A slice of matching assets plus its pagination metadata."""

    items: List[Asset]
    meta: PageMeta


def build_predicates(query: AssetQuery) -> list:
    """Build the list of SQL predicates for the present filter fields."""
    predicates = []

    for field, build in FIELD_FILTERS.items():
        value = getattr(query, field)
        if value is None:
            continue
        clause = build(value)
        if clause is not None:
            predicates.append(clause)

    if query.min_price is not None or query.max_price is not None:
        lower = query.min_price if query.min_price is not None else 0
        upper = query.max_price if query.max_price is not None else sys.float_info.max
        predicates.append(Asset.price.between(lower, upper))

    return predicates


def _base_query(db: Session) -> Query:
    return db.query(Asset).options(
        selectinload(Asset.translations),
        selectinload(Asset.user),
    )


def find_assets(
    db: Session,
    query: AssetQuery,
    page_options: Optional[PageOptions] = None,
) -> Union[List[Asset], AssetPage]:
    """Find assets matching every present filter.

    Args:
        db: Database session
        query: Asset filters
        page_options: Pagination options. When omitted the full match list is
            returned, sorted ascending by ``query.order_by`` if given.

    Returns:
        List of assets, or an AssetPage when page_options is given

    Raises:
        InvalidQueryError: If page_options describe an impossible page

    Examples:
        >>> find_assets(db, AssetQuery(min_price=60, max_price=120))
        [<Asset(id=2, uuid=..., user_id=1)>]
        >>> page = find_assets(db, AssetQuery(), PageOptions(page=3, take=10))
        >>> page.meta.has_next_page
        False
    """
    q = _base_query(db).filter(*build_predicates(query))

    if page_options is None:
        if query.order_by is not None:
            q = q.order_by(asc(ORDER_COLUMNS[query.order_by]), asc(Asset.id))
        return q.all()

    if page_options.page < 1 or page_options.take < 1:
        raise InvalidQueryError("page and take must be at least 1")

    item_count = q.count()

    column = ORDER_COLUMNS[query.order_by] if query.order_by is not None else Asset.created_at
    direction = desc if page_options.order == Order.DESC else asc
    items = (
        q.order_by(direction(column), direction(Asset.id))
        .offset(page_options.skip)
        .limit(page_options.take)
        .all()
    )

    return AssetPage(items=items, meta=PageMeta.from_count(page_options, item_count))


def get_asset(db: Session, asset_uuid: str, lock: bool = False) -> Asset:
    """Get asset with translations and owner.

    Args:
        db: Database session
        asset_uuid: Asset UUID
        lock: Take a row lock for the rest of the transaction

    Raises:
        NotFoundError: If asset not found
    """
    q = _base_query(db).filter(Asset.uuid == asset_uuid)
    if lock:
        q = q.with_for_update(of=Asset)

    asset = q.first()
    if not asset:
        raise NotFoundError(f"Asset {asset_uuid} not found")

    return asset
