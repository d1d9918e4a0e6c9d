"""
Catalog query composition.

Each optional filter field has a predicate builder that returns a SQLAlchemy
clause, or None when the field is not populated. The populated clauses,
the soft-delete guard and the per-user exclusion overlay are folded into a
single conjunction, so counting, ordering and pagination all happen in SQL
over the already-filtered set.
"""
import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import String, and_, exists, func, literal, or_, true
from sqlalchemy.orm import Session

from catalog.core.config import settings
from catalog.core.exceptions import InvalidInputError
from catalog.enums.sorting import ProductSortField, SortOrder
from catalog.models.preference import ExcludedBrand, ExcludedKeyword
from catalog.models.product import Product, ProductKeyword
from catalog.schemas.filters import ProductFilter
from catalog.schemas.product import ProductResponse

logger = logging.getLogger(__name__)

PREDICATES: List[Callable[[ProductFilter], Optional[object]]] = []


def predicate(builder):
    PREDICATES.append(builder)
    return builder


LIKE_ESCAPE = "/"


def _lowered(column):
    return func.lower(func.coalesce(column, ""))


def _like_escaped(expression):
    for char in (LIKE_ESCAPE, "%", "_"):
        expression = func.replace(expression, char, LIKE_ESCAPE + char)
    return expression


def _contains(column, term):
    """
    Case-insensitive substring match of ``term`` (a string or a column) in
    ``column``. Both sides are lowered by the database, and ``%``/``_`` in the
    term are matched literally.
    """
    if isinstance(term, str):
        term = literal(term, String)
    return _lowered(column).contains(_like_escaped(func.lower(term)), escape=LIKE_ESCAPE)


def _keyword_matches(term):
    """Some keyword of the product contains ``term``."""
    return (
        exists()
        .where(ProductKeyword.product_id == Product.id, _contains(ProductKeyword.keyword, term))
        .correlate(Product)
    )


def _title_matches(term):
    return _contains(Product.title, term)


# --------------------------
# FIELD PREDICATES
# --------------------------
@predicate
def _marketplace(f: ProductFilter):
    if f.marketplace_id is not None:
        return Product.marketplace_id == f.marketplace_id


@predicate
def _product_type(f: ProductFilter):
    if f.product_type_id is not None:
        return Product.product_type_id == f.product_type_id


@predicate
def _brand(f: ProductFilter):
    if f.brand_id is not None:
        return Product.brand_id == f.brand_id


def _range(column, low, high):
    clauses = []
    if low is not None:
        clauses.append(column >= low)
    if high is not None:
        clauses.append(column <= high)
    if clauses:
        return and_(*clauses)


@predicate
def _price(f: ProductFilter):
    return _range(Product.price, f.min_price, f.max_price)


@predicate
def _bsr(f: ProductFilter):
    return _range(Product.bsr, f.min_bsr, f.max_bsr)


@predicate
def _rating(f: ProductFilter):
    return _range(Product.rating, f.min_rating, f.max_rating)


@predicate
def _review_count(f: ProductFilter):
    return _range(Product.reviews_count, f.min_review_count, f.max_review_count)


@predicate
def _published(f: ProductFilter):
    return _range(Product.published_at, f.published_after, f.published_before)


@predicate
def _search(f: ProductFilter):
    text = (f.search_query or "").strip()
    if text:
        return or_(
            _title_matches(text),
            _contains(Product.description_text, text),
            _keyword_matches(text),
        )


@predicate
def _deleted(f: ProductFilter):
    if not f.include_deleted:
        return or_(Product.deleted.is_(None), Product.deleted == False)  # noqa: E712


@predicate
def _explicit_brand_exclusions(f: ProductFilter):
    if f.excluded_brands:
        # products without a brand never match a brand exclusion
        return or_(Product.brand_id.is_(None), Product.brand_id.not_in(f.excluded_brands))


@predicate
def _explicit_keyword_exclusions(f: ProductFilter):
    terms = [k.strip() for k in (f.excluded_keywords or []) if k and k.strip()]
    if terms:
        return and_(*[~or_(_title_matches(t), _keyword_matches(t)) for t in terms])


# --------------------------
# USER OVERLAY
# --------------------------
def user_overlay(user_id: str) -> list:
    """AND-NOT terms removing products the user has excluded by brand or keyword."""
    brand_excluded = exists().where(
        ExcludedBrand.user_id == user_id,
        ExcludedBrand.brand_id == Product.brand_id,
    )
    keyword_excluded = exists().where(
        ExcludedKeyword.user_id == user_id,
        or_(
            _title_matches(ExcludedKeyword.keyword),
            _keyword_matches(ExcludedKeyword.keyword),
        ),
    )
    return [~brand_excluded, ~keyword_excluded]


def build_conditions(filters: ProductFilter, user_id: Optional[str] = None) -> list:
    conditions = [c for c in (build(filters) for build in PREDICATES) if c is not None]
    if user_id:
        conditions.extend(user_overlay(user_id))
    return conditions


def resolve_page(filters: ProductFilter) -> Tuple[int, int]:
    """Validated (limit, offset); limit defaults to DEFAULT_PAGE_SIZE and is capped at MAX_PAGE_SIZE."""
    limit = settings.DEFAULT_PAGE_SIZE if filters.limit is None else filters.limit
    offset = filters.offset or 0
    if limit <= 0:
        raise InvalidInputError("limit must be a positive integer")
    if offset < 0:
        raise InvalidInputError("offset must not be negative")
    return min(limit, settings.MAX_PAGE_SIZE), offset


SORT_COLUMNS = {
    ProductSortField.id: Product.id,
    ProductSortField.price: Product.price,
    ProductSortField.bsr: Product.bsr,
    ProductSortField.rating: Product.rating,
    ProductSortField.reviews_count: Product.reviews_count,
    ProductSortField.first_seen_at: Product.first_seen_at,
    ProductSortField.published_at: Product.published_at,
}


def _ordering(filters: ProductFilter) -> list:
    column = SORT_COLUMNS[ProductSortField(filters.sort_by)]
    descending = SortOrder(filters.sort_order) == SortOrder.desc
    primary = column.desc() if descending else column.asc()
    if ProductSortField(filters.sort_by) == ProductSortField.id:
        return [primary]
    return [primary, Product.id.asc()]


# --------------------------
# QUERY
# --------------------------
def query_products(
    db: Session,
    filters: Optional[ProductFilter] = None,
    user_id: Optional[str] = None,
) -> Tuple[List[ProductResponse], int]:
    """
    Returns (items, total_count). ``total_count`` is counted over the same
    filtered statement the page is cut from.
    """
    filters = filters or ProductFilter()
    limit, offset = resolve_page(filters)

    conditions = build_conditions(filters, user_id)
    logger.debug(f"Product query: {len(conditions)} conditions, user={user_id}, limit={limit}, offset={offset}")

    query = db.query(Product).filter(and_(true(), *conditions))

    total = query.with_entities(func.count(Product.id)).scalar() or 0
    rows = query.order_by(*_ordering(filters)).offset(offset).limit(limit).all()

    return [ProductResponse.model_validate(row) for row in rows], total


def list_products(
    db: Session,
    filters: Optional[ProductFilter] = None,
    user_id: Optional[str] = None,
) -> List[ProductResponse]:
    items, _ = query_products(db, filters, user_id)
    return items
