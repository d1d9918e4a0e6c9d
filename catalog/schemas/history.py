from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class BsrRecordRequest(BaseModel):
    bsr: Optional[int] = Field(default=None, ge=1)


class PriceRecordRequest(BaseModel):
    price: float = Field(ge=0)
    currency_code: str = Field(min_length=3, max_length=3)


class ReviewRecordRequest(BaseModel):
    rating: float = Field(ge=0, le=5)
    reviews_count: int = Field(ge=0)


class BsrHistoryResponse(BaseModel):
    id: int
    product_id: int
    date: date
    bsr: Optional[int] = None

    class Config:
        from_attributes = True


class PriceHistoryResponse(BaseModel):
    id: int
    product_id: int
    date: date
    price: Optional[float] = None
    currency_code: str

    class Config:
        from_attributes = True


class ReviewHistoryResponse(BaseModel):
    id: int
    product_id: int
    date: date
    rating: Optional[float] = None
    reviews_count: Optional[int] = None

    class Config:
        from_attributes = True
