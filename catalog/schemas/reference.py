from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MarketplaceResponse(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True


class ProductTypeResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class BrandResponse(BaseModel):
    id: int
    name: str
    normalized_name: str

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
