from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from catalog.core.config import settings
from catalog.enums.product_status import ProductStatus


class ProductBase(BaseModel):
    product_type_id: Optional[int] = None
    brand_id: Optional[int] = None
    title: Optional[str] = None
    description_text: Optional[str] = None
    bullet_points: Optional[List[str]] = None
    images: Optional[List[str]] = None
    product_url: Optional[str] = None
    published_at: Optional[date] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency_code: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    reviews_count: Optional[int] = Field(default=None, ge=0)
    bsr: Optional[int] = Field(default=None, ge=1)
    bsr_30_days_avg: Optional[int] = Field(default=None, ge=1)
    discovery_query: Optional[str] = None
    raw_data: Optional[Dict[str, Any]] = None


class ProductCreate(ProductBase):
    asin: str = Field(min_length=1, max_length=20)
    marketplace_id: int
    source_type: Optional[str] = None

    @field_validator("asin")
    @classmethod
    def _strip_asin(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("asin must not be blank")
        return v


class ProductUpdate(ProductBase):
    """
    Partial update: only fields present in the request body are applied.
    An explicit null clears a nullable column.
    """
    status: Optional[str] = None
    source_type: Optional[str] = None
    last_scraped_at: Optional[datetime] = None
    # stamp last_scraped_at with the current time (re-scrape driven updates)
    mark_scraped: bool = False


class ProductResponse(BaseModel):
    id: int
    asin: str
    marketplace_id: int
    product_type_id: Optional[int] = None
    brand_id: Optional[int] = None
    title: Optional[str] = None
    description_text: Optional[str] = None
    bullet_points: Optional[List[str]] = None
    images: Optional[List[str]] = None
    product_url: Optional[str] = None
    published_at: Optional[date] = None
    price: Optional[float] = None
    currency_code: str = settings.DEFAULT_CURRENCY
    rating: Optional[float] = None
    reviews_count: Optional[int] = None
    bsr: Optional[int] = None
    bsr_30_days_avg: Optional[int] = None
    deleted: bool = False
    status: str = ProductStatus.pending_enrichment.value
    discovery_query: Optional[str] = None
    source_type: str = settings.DEFAULT_SOURCE_TYPE
    raw_data: Optional[Dict[str, Any]] = None
    first_seen_at: datetime
    last_scraped_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    # Storage may hold NULL for columns that carry a schema default;
    # every read path goes through these so records come back identically shaped.

    @field_validator("currency_code", mode="before")
    @classmethod
    def _default_currency(cls, v):
        return v if v is not None else settings.DEFAULT_CURRENCY

    @field_validator("deleted", mode="before")
    @classmethod
    def _default_deleted(cls, v):
        return bool(v) if v is not None else False

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return v if v is not None else ProductStatus.pending_enrichment.value

    @field_validator("source_type", mode="before")
    @classmethod
    def _default_source_type(cls, v):
        return v if v is not None else settings.DEFAULT_SOURCE_TYPE

    @field_validator("first_seen_at", "created_at", "updated_at", mode="before")
    @classmethod
    def _default_timestamp(cls, v):
        return v if v is not None else datetime.utcnow()

    @field_validator("price", "rating", mode="before")
    @classmethod
    def _decimal_to_float(cls, v):
        return float(v) if v is not None else None


class ProductPageMeta(BaseModel):
    total: int
    limit: int
    offset: int


class ProductPageResponse(BaseModel):
    items: List[ProductResponse]
    meta: ProductPageMeta


class ProductKeywordCreate(BaseModel):
    keyword: str = Field(min_length=1)


class ProductKeywordResponse(BaseModel):
    id: int
    product_id: int
    keyword: str

    class Config:
        from_attributes = True
