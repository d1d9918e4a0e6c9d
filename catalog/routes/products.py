from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from catalog.database.connection import get_db
from catalog.enums.sorting import ProductSortField, SortOrder
from catalog.schemas.filters import ProductFilter
from catalog.schemas.product import (
    ProductCreate,
    ProductKeywordCreate,
    ProductKeywordResponse,
    ProductPageMeta,
    ProductPageResponse,
    ProductResponse,
    ProductUpdate,
)
from catalog.services.product_service import (
    add_product_keyword,
    create_product,
    get_product,
    get_product_by_asin,
    list_product_keywords,
    soft_delete_product,
    update_product,
)
from catalog.services.query_service import query_products, resolve_page

router = APIRouter(prefix="/products", tags=["Product Catalog"])


def product_filter_params(
    marketplace_id: Optional[int] = None,
    product_type_id: Optional[int] = None,
    brand_id: Optional[int] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    min_bsr: Optional[int] = None,
    max_bsr: Optional[int] = None,
    min_rating: Optional[float] = None,
    max_rating: Optional[float] = None,
    min_review_count: Optional[int] = None,
    max_review_count: Optional[int] = None,
    published_after: Optional[date] = None,
    published_before: Optional[date] = None,
    search_query: Optional[str] = None,
    excluded_brands: Optional[List[int]] = Query(None),
    excluded_keywords: Optional[List[str]] = Query(None),
    include_deleted: bool = False,
    sort_by: ProductSortField = ProductSortField.id,
    sort_order: SortOrder = SortOrder.asc,
    limit: Optional[int] = None,
    offset: int = 0,
) -> ProductFilter:
    return ProductFilter(
        marketplace_id=marketplace_id,
        product_type_id=product_type_id,
        brand_id=brand_id,
        min_price=min_price,
        max_price=max_price,
        min_bsr=min_bsr,
        max_bsr=max_bsr,
        min_rating=min_rating,
        max_rating=max_rating,
        min_review_count=min_review_count,
        max_review_count=max_review_count,
        published_after=published_after,
        published_before=published_before,
        search_query=search_query,
        excluded_brands=excluded_brands,
        excluded_keywords=excluded_keywords,
        include_deleted=include_deleted,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )


# CREATE
@router.post("/", response_model=ProductResponse, status_code=201)
def create(data: ProductCreate, db: Session = Depends(get_db)):
    return create_product(db, data)


# QUERY
@router.get("/", response_model=ProductPageResponse)
def list_all(
    filters: ProductFilter = Depends(product_filter_params),
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    limit, offset = resolve_page(filters)
    items, total = query_products(db, filters, user_id=user_id)
    return ProductPageResponse(
        items=items,
        meta=ProductPageMeta(total=total, limit=limit, offset=offset),
    )


# GET BY ASIN
@router.get("/by-asin/{asin}", response_model=ProductResponse)
def get_by_asin(asin: str, marketplace_id: int, db: Session = Depends(get_db)):
    product = get_product_by_asin(db, asin, marketplace_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


# GET BY ID
@router.get("/{product_id}", response_model=ProductResponse)
def get(product_id: int, db: Session = Depends(get_db)):
    product = get_product(db, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


# UPDATE
@router.patch("/{product_id}", response_model=ProductResponse)
def update(product_id: int, data: ProductUpdate, db: Session = Depends(get_db)):
    return update_product(db, product_id, data)


# SOFT DELETE
@router.delete("/{product_id}")
def delete(product_id: int, db: Session = Depends(get_db)):
    success = soft_delete_product(db, product_id)
    if not success:
        raise HTTPException(404, "Product not found")
    return {"message": "Product deleted", "product_id": product_id}


# KEYWORDS
@router.post("/{product_id}/keywords", response_model=ProductKeywordResponse, status_code=201)
def add_keyword(product_id: int, data: ProductKeywordCreate, db: Session = Depends(get_db)):
    return add_product_keyword(db, product_id, data.keyword)


@router.get("/{product_id}/keywords", response_model=List[ProductKeywordResponse])
def list_keywords(product_id: int, db: Session = Depends(get_db)):
    return list_product_keywords(db, product_id)
