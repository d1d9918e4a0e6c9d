from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from catalog.enums.sorting import ProductSortField, SortOrder


class ProductFilter(BaseModel):
    """
    Catalog query. Every field is optional; omitted fields impose no
    constraint and populated ones are ANDed together. Range bounds are
    inclusive.
    """

    marketplace_id: Optional[int] = None
    product_type_id: Optional[int] = None
    brand_id: Optional[int] = None

    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_bsr: Optional[int] = None
    max_bsr: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    min_review_count: Optional[int] = None
    max_review_count: Optional[int] = None
    published_after: Optional[date] = None
    published_before: Optional[date] = None

    search_query: Optional[str] = None

    # explicit overrides, applied on top of any per-user exclusions
    excluded_brands: Optional[List[int]] = None
    excluded_keywords: Optional[List[str]] = None

    include_deleted: bool = False

    sort_by: ProductSortField = ProductSortField.id
    sort_order: SortOrder = SortOrder.asc

    # validated by the query service so bad values surface as InvalidInputError
    limit: Optional[int] = None
    offset: int = 0
