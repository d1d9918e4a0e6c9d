from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------- Excluded brands / keywords ----------

class ExcludedBrandCreate(BaseModel):
    brand_id: int


class ExcludedBrandResponse(BaseModel):
    id: int
    user_id: str
    brand_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class ExcludedBrandDetail(BaseModel):
    id: int
    brand_id: int
    brand_name: str
    created_at: datetime


class ExcludedKeywordCreate(BaseModel):
    keyword: str = Field(min_length=1)


class ExcludedKeywordResponse(BaseModel):
    id: int
    user_id: str
    keyword: str
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Favorite groups ----------

class FavoriteGroupCreate(BaseModel):
    name: str = Field(min_length=1)


class FavoriteGroupResponse(BaseModel):
    id: int
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GroupMembershipCreate(BaseModel):
    product_id: int


class GroupMembershipResponse(BaseModel):
    id: int
    user_id: str
    group_id: int
    product_id: int
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Saved products ----------

class SavedProductCreate(BaseModel):
    product_id: int


class SavedProductResponse(BaseModel):
    id: int
    user_id: str
    product_id: int
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Aggregate ----------

class UserPreferenceReplace(BaseModel):
    """A list that is present replaces the stored set; null leaves it untouched."""
    excluded_brands: Optional[List[int]] = None
    excluded_keywords: Optional[List[str]] = None


class UserPreferenceResponse(BaseModel):
    user_id: str
    excluded_brands: List[ExcludedBrandDetail] = []
    excluded_keywords: List[ExcludedKeywordResponse] = []
    favorite_groups: List[FavoriteGroupResponse] = []
